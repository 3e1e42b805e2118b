"""
Interactive demonstration of the homomorphic properties of Paillier
(addition) and RSA (multiplication).
"""
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence
import argparse
import logging

from arithmetic.bigint import BigSignedInt
from arithmetic.errors import FormatError, HomomorphicError
from encryption.paillier_encryption import Paillier, decode_signed, encode_signed
from encryption.params import DemoParams
from encryption.rsa_encryption import RSA


@dataclass
class AdditionResult:
    ciphertexts: List[BigSignedInt]
    combined: BigSignedInt
    decrypted: BigSignedInt
    expected: BigSignedInt

    @property
    def verified(self) -> bool:
        return self.decrypted == self.expected


@dataclass
class MultiplicationResult:
    ciphertexts: List[BigSignedInt]
    combined: BigSignedInt
    decrypted: BigSignedInt
    expected: BigSignedInt

    @property
    def verified(self) -> bool:
        return self.decrypted == self.expected


def run_paillier_addition(messages: Sequence, params: DemoParams = DemoParams(),
                          random_source=None) -> AdditionResult:
    """Encrypt each message, add them under encryption and check the decrypted sum."""
    paillier = Paillier(params.paillier.p, params.paillier.q,
                        random_source=random_source, check_primes=params.check_primes)
    n = paillier.n
    print(f"\n[Paillier] Using modulus n = {n}")

    values = [BigSignedInt.coerce(m) for m in messages]
    encoded = [encode_signed(v, n) for v in values]
    ciphertexts = [paillier.encrypt(m) for m in encoded]
    for i, c in enumerate(ciphertexts):
        print(f"[Paillier] Encrypted Data {i}: {c}")

    combined = paillier.homomorphic_add(*ciphertexts)
    decrypted = decode_signed(paillier.decrypt(combined), n)
    expected = decode_signed(encode_signed(sum(values, BigSignedInt(0)), n), n)

    print(f"[Paillier] Encrypted Result (product of ciphertexts): {combined}")
    print(f"[Paillier] Decrypted Result: {decrypted}")
    print(f"[Paillier] Expected Result: {expected}")
    result = AdditionResult(ciphertexts, combined, decrypted, expected)
    print(f"[Paillier] Homomorphic addition: {'SUCCESS' if result.verified else 'FAILURE'}")
    return result


def run_rsa_multiplication(m1, m2, params: DemoParams = DemoParams()) -> MultiplicationResult:
    """Encrypt two messages, multiply them under encryption and check the decrypted product."""
    rsa = RSA(params.rsa.p, params.rsa.q, params.rsa.e, check_primes=params.check_primes)
    print(f"\n[RSA] Using modulus n = {rsa.modulus}")

    m1, m2 = BigSignedInt.coerce(m1), BigSignedInt.coerce(m2)
    ciphertexts = [rsa.encrypt(m1), rsa.encrypt(m2)]
    for i, c in enumerate(ciphertexts, 1):
        print(f"[RSA] Encrypted Data {i}: {c}")

    combined = rsa.homomorphic_multiply(*ciphertexts)
    decrypted = rsa.decrypt(combined)
    expected = (m1 * m2) % rsa.modulus

    print(f"[RSA] Encrypted Result (product of ciphertexts): {combined}")
    print(f"[RSA] Decrypted Result: {decrypted}")
    print(f"[RSA] Expected Result: {expected}")
    result = MultiplicationResult(ciphertexts, combined, decrypted, expected)
    print(f"[RSA] Homomorphic multiplication: {'SUCCESS' if result.verified else 'FAILURE'}")
    return result


def _read_int(prompt: str, read: Callable[[str], str]) -> BigSignedInt:
    while True:
        try:
            return BigSignedInt.from_string(read(prompt).strip())
        except FormatError as e:
            print(f"Invalid number ({e}), try again.")


def menu_paillier_addition(params: DemoParams, read: Callable[[str], str] = input):
    count = int(_read_int("Enter the number of messages: ", read))
    if count < 1:
        print("At least one message is required.")
        return None
    print(f"Enter {count} messages (can be negative):")
    messages = [_read_int("> ", read) for _ in range(count)]
    return run_paillier_addition(messages, params)


def menu_rsa_multiplication(params: DemoParams, read: Callable[[str], str] = input):
    m1 = _read_int("Enter the first plaintext (data1): ", read)
    m2 = _read_int("Enter the second plaintext (data2): ", read)
    return run_rsa_multiplication(m1, m2, params)


def main(argv: Optional[Sequence[str]] = None, read: Callable[[str], str] = input,
         params: Optional[DemoParams] = None) -> int:
    parser = argparse.ArgumentParser(description="Homomorphic encryption demo (Paillier and RSA)")
    parser.add_argument("--demo", action="store_true",
                        help="run the fixed scenarios and exit")
    parser.add_argument("--check-primes", action="store_true",
                        help="verify that the configured p and q are prime")
    parser.add_argument("--verbose", action="store_true", help="enable debug logging")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    if params is None:
        params = DemoParams(check_primes=args.check_primes)

    if args.demo:
        added = run_paillier_addition([5, -3, 10], params)
        multiplied = run_rsa_multiplication(7, 9, params)
        return 0 if added.verified and multiplied.verified else 1

    actions = {
        "1": menu_paillier_addition,
        "2": menu_rsa_multiplication,
    }
    choice = None
    while choice != "3":
        print("\nChoose an operation:")
        print("1. Homomorphic Addition (Paillier)")
        print("2. Homomorphic Multiplication (RSA)")
        print("3. Exit")
        try:
            choice = read("Enter your choice: ").strip()
        except EOFError:
            break
        if choice == "3":
            continue
        action = actions.get(choice)
        if action is None:
            print("Invalid choice! Please choose 1, 2 or 3.")
            continue
        try:
            action(params, read)
        except HomomorphicError as e:
            print(f"Error: {e}")
        except EOFError:
            break
    print("Thanks for using Homomorphic Encryption. Have a nice day!")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
