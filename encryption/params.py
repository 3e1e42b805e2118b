from dataclasses import dataclass, field


@dataclass(frozen=True)
class PaillierParams:
    """Primes used to derive the Paillier key pair"""
    p: int = 10007
    q: int = 10009


@dataclass(frozen=True)
class RSAParams:
    """Primes and public exponent used to derive the RSA key pair"""
    p: int = 10000019
    q: int = 10000079
    e: int = 10000103


@dataclass(frozen=True)
class DemoParams:
    """Container for everything the demo driver needs"""
    paillier: PaillierParams = field(default_factory=PaillierParams)
    rsa: RSAParams = field(default_factory=RSAParams)
    check_primes: bool = False  # validate p, q with sympy before deriving keys
