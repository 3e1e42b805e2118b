from dataclasses import dataclass
from typing import Callable, Optional
import logging
import secrets

from arithmetic.bigint import BigSignedInt
from arithmetic.errors import DomainError, KeyGenError, NoInverseError
from arithmetic.modular import check_key_primes, gcd, mod_inverse, mod_pow

logger = logging.getLogger(__name__)

# Draws an int uniformly from [0, upper)
RandomSource = Callable[[int], int]


@dataclass(frozen=True)
class PaillierKeyPair:
    n: BigSignedInt
    g: BigSignedInt
    lambda_: BigSignedInt
    mu: BigSignedInt
    n_squared: BigSignedInt


class Paillier:
    def __init__(self, p, q, random_source: Optional[RandomSource] = None,
                 check_primes: bool = False):
        p, q = BigSignedInt.coerce(p), BigSignedInt.coerce(q)
        if check_primes:
            check_key_primes(p, q)
        self._random_source = random_source or secrets.randbelow
        self._generate_keys(p, q)

    def _generate_keys(self, p: BigSignedInt, q: BigSignedInt) -> None:
        n = p * q
        n_squared = n * n
        g = n + 1
        lambda_n = (p - 1) * (q - 1)
        try:
            mu = mod_inverse(self._L(mod_pow(g, lambda_n, n_squared), n), n)
        except NoInverseError as e:
            raise KeyGenError(f"p={p}, q={q} do not yield an invertible mu") from e

        self._keys = PaillierKeyPair(n=n, g=g, lambda_=lambda_n, mu=mu, n_squared=n_squared)
        logger.info("Paillier keys derived, n=%s (%d bits)", n, n.bit_length())

    @property
    def keys(self) -> PaillierKeyPair:
        return self._keys

    @property
    def n(self) -> BigSignedInt:
        return self.keys.n

    @property
    def g(self) -> BigSignedInt:
        return self.keys.g

    @staticmethod
    def _L(x: BigSignedInt, n: BigSignedInt) -> BigSignedInt:
        quotient, remainder = divmod(x - 1, n)
        if remainder != 0:
            raise DomainError(f"L is undefined for {x}: not congruent to 1 mod {n}")
        return quotient

    def sample_blinding_factor(self) -> BigSignedInt:
        """Draw r uniformly from [1, n-1], redrawing until gcd(r, n) == 1."""
        n = self.keys.n
        if n <= 2:
            return BigSignedInt(1)
        attempts = 0
        while True:
            attempts += 1
            r = BigSignedInt(self._random_source(int(n) - 1)) + 1
            if gcd(r, n) == 1:
                logger.debug("Blinding factor drawn in %d attempt(s)", attempts)
                return r

    def encrypt(self, message, r=None) -> BigSignedInt:
        """
        Encrypt an encoded message m in [0, n).

        Negative logical values must go through encode_signed first. When r is
        omitted a fresh blinding factor is sampled for this call.
        """
        n, n_sq = self.keys.n, self.keys.n_squared
        m = BigSignedInt.coerce(message)
        if not 0 <= m < n:
            raise DomainError(f"encoded message must lie in [0, {n}), got {m}")

        if r is None:
            r = self.sample_blinding_factor()
        else:
            r = BigSignedInt.coerce(r)
            unit = r == 1 if n <= 2 else (1 <= r < n and gcd(r, n) == 1)
            if not unit:
                raise DomainError(f"blinding factor {r} is not a unit modulo {n}")

        c = (mod_pow(self.keys.g, m, n_sq) * mod_pow(r, n, n_sq)) % n_sq
        logger.debug("Paillier encrypted %s", m)
        return c

    def decrypt(self, ciphertext) -> BigSignedInt:
        """Recover the plaintext, still in its encoded form in [0, n)."""
        n, n_sq = self.keys.n, self.keys.n_squared
        c = BigSignedInt.coerce(ciphertext)
        if not 0 <= c < n_sq:
            raise DomainError(f"ciphertext must lie in [0, {n_sq}), got {c}")
        return (self._L(mod_pow(c, self.keys.lambda_, n_sq), n) * self.keys.mu) % n

    def homomorphic_add(self, *ciphertexts) -> BigSignedInt:
        """Multiply ciphertexts mod n^2; the result decrypts to the sum of the plaintexts mod n."""
        if not ciphertexts:
            raise DomainError("homomorphic_add needs at least one ciphertext")
        values = [BigSignedInt.coerce(c) for c in ciphertexts]
        if self.keys.n == 1:
            return values[0]

        n_sq = self.keys.n_squared
        total = BigSignedInt(1)
        for c in values:
            total = (total * c) % n_sq
        logger.debug("Paillier added %d ciphertexts", len(values))
        return total

    def homomorphic_add_constant(self, ciphertext, k) -> BigSignedInt:
        n_sq = self.keys.n_squared
        k = encode_signed(k, self.keys.n)
        return (BigSignedInt.coerce(ciphertext) * mod_pow(self.keys.g, k, n_sq)) % n_sq

    def homomorphic_multiply_constant(self, ciphertext, k) -> BigSignedInt:
        k = encode_signed(k, self.keys.n)
        return mod_pow(ciphertext, k, self.keys.n_squared)


def encode_signed(value, n) -> BigSignedInt:
    """Map a signed value into [0, n); negative m becomes n + m."""
    value, n = BigSignedInt.coerce(value), BigSignedInt.coerce(n)
    if n <= 0:
        raise DomainError(f"modulus must be positive, got {n}")
    return value % n


def decode_signed(value, n) -> BigSignedInt:
    """Inverse of encode_signed: values above n // 2 map back to negatives."""
    value, n = BigSignedInt.coerce(value), BigSignedInt.coerce(n)
    if n <= 0:
        raise DomainError(f"modulus must be positive, got {n}")
    if not 0 <= value < n:
        raise DomainError(f"encoded value must lie in [0, {n}), got {value}")
    if value > n // 2:
        return value - n
    return value
