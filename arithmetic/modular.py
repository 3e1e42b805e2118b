"""
Modular arithmetic over BigSignedInt shared by the RSA and Paillier schemes.

Every function accepts BigSignedInt, int or decimal text operands and returns
BigSignedInt values.
"""
import sympy

from arithmetic.bigint import BigSignedInt
from arithmetic.errors import DomainError, KeyGenError, NoInverseError


def gcd(a, b) -> BigSignedInt:
    """Greatest common divisor by Euclid's recursion; gcd(a, 0) == |a|."""
    a, b = BigSignedInt.coerce(a), BigSignedInt.coerce(b)
    if b == 0:
        return abs(a)
    return gcd(b, a % b)


def mod_pow(base, exponent, modulus) -> BigSignedInt:
    """Compute base^exponent mod modulus with square-and-multiply."""
    base = BigSignedInt.coerce(base)
    exponent = BigSignedInt.coerce(exponent)
    modulus = BigSignedInt.coerce(modulus)
    if modulus <= 0:
        raise DomainError(f"modulus must be positive, got {modulus}")
    if exponent < 0:
        raise DomainError(f"exponent must be non-negative, got {exponent}")

    result = BigSignedInt(1) % modulus
    base = base % modulus
    while exponent > 0:
        if exponent % 2 == 1:
            result = (result * base) % modulus
        base = (base * base) % modulus
        exponent = exponent // 2
    return result


def mod_inverse(a, modulus) -> BigSignedInt:
    """
    Modular multiplicative inverse using the extended Euclidean algorithm.

    Returns the unique x in [0, modulus) with a*x = 1 (mod modulus). Raises
    NoInverseError when gcd(a, modulus) != 1.
    """
    a = BigSignedInt.coerce(a)
    modulus = BigSignedInt.coerce(modulus)
    if modulus <= 0:
        raise DomainError(f"modulus must be positive, got {modulus}")
    if modulus == 1:
        return BigSignedInt(0)

    old_r, r = a % modulus, modulus
    old_s, s = BigSignedInt(1), BigSignedInt(0)
    while r != 0:
        q = old_r // r
        old_r, r = r, old_r - q * r
        old_s, s = s, old_s - q * s

    if old_r != 1:
        raise NoInverseError(f"{a} has no inverse modulo {modulus} (gcd = {old_r})")
    return old_s % modulus


def is_prime(x) -> bool:
    """Primality check for key inputs; delegates to sympy."""
    return bool(sympy.isprime(int(BigSignedInt.coerce(x))))


def check_key_primes(p, q) -> None:
    """Raise KeyGenError unless p and q are distinct primes."""
    p, q = BigSignedInt.coerce(p), BigSignedInt.coerce(q)
    if p == q:
        raise KeyGenError(f"p and q must be distinct, both are {p}")
    for name, value in (("p", p), ("q", q)):
        if not is_prime(value):
            raise KeyGenError(f"{name}={value} is not prime")
