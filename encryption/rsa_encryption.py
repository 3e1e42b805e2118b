from dataclasses import dataclass
import logging

from arithmetic.bigint import BigSignedInt
from arithmetic.modular import check_key_primes, mod_inverse, mod_pow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RSAKeyPair:
    n: BigSignedInt  # modulus p*q
    e: BigSignedInt  # public exponent
    d: BigSignedInt  # private exponent, e*d = 1 (mod phi)


class RSA:
    """
    Textbook RSA over fixed primes, multiplicatively homomorphic:
    Dec(Enc(m1) * Enc(m2) mod n) == m1 * m2 mod n.

    p and q are expected to be distinct primes; pass check_primes=True to
    have that verified before the keys are derived.
    """

    def __init__(self, p, q, e, check_primes: bool = False):
        p, q, e = (BigSignedInt.coerce(x) for x in (p, q, e))
        if check_primes:
            check_key_primes(p, q)
        self._generate_keys(p, q, e)

    def _generate_keys(self, p: BigSignedInt, q: BigSignedInt, e: BigSignedInt) -> None:
        n = p * q
        phi = (p - 1) * (q - 1)
        # NoInverseError propagates when e shares a factor with phi
        d = mod_inverse(e, phi)
        self._keys = RSAKeyPair(n=n, e=e, d=d)
        logger.info("RSA keys derived, n=%s (%d bits)", n, n.bit_length())

    @property
    def keys(self) -> RSAKeyPair:
        return self._keys

    @property
    def modulus(self) -> BigSignedInt:
        return self._keys.n

    @property
    def public_key(self) -> BigSignedInt:
        return self._keys.e

    @property
    def private_key(self) -> BigSignedInt:
        return self._keys.d

    def encrypt(self, message) -> BigSignedInt:
        """c = m^e mod n. Messages outside [0, n) alias modulo n."""
        m = BigSignedInt.coerce(message)
        c = mod_pow(m, self._keys.e, self._keys.n)
        logger.debug("RSA encrypted %s", m)
        return c

    def decrypt(self, ciphertext) -> BigSignedInt:
        c = BigSignedInt.coerce(ciphertext)
        return mod_pow(c, self._keys.d, self._keys.n)

    def homomorphic_multiply(self, c1, c2, *more) -> BigSignedInt:
        """Combine ciphertexts so the result decrypts to the product of the plaintexts."""
        result = BigSignedInt.coerce(c1) % self._keys.n
        for c in (c2,) + more:
            result = (result * BigSignedInt.coerce(c)) % self._keys.n
        logger.debug("RSA multiplied %d ciphertexts", 2 + len(more))
        return result
