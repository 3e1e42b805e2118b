"""
Tests for the demo driver: scripted scenarios and the interactive menu.
"""

import io
import random
import unittest
from contextlib import redirect_stdout

from encryption.params import DemoParams, PaillierParams, RSAParams
from homomorphic_demo import main, menu_paillier_addition, run_paillier_addition, run_rsa_multiplication


def scripted_input(*answers):
    queue = list(answers)

    def read(prompt):
        if not queue:
            raise EOFError
        return queue.pop(0)
    return read


class TestScenarios(unittest.TestCase):

    def setUp(self):
        self.out = io.StringIO()

    def test_paillier_scenario(self):
        with redirect_stdout(self.out):
            result = run_paillier_addition([5, -3, 10], random_source=random.Random(3).randrange)
        self.assertTrue(result.verified)
        self.assertEqual(result.decrypted, 12)
        self.assertEqual(len(result.ciphertexts), 3)
        self.assertIn("[Paillier] Decrypted Result: 12", self.out.getvalue())

    def test_rsa_scenario(self):
        with redirect_stdout(self.out):
            result = run_rsa_multiplication(7, 9)
        self.assertTrue(result.verified)
        self.assertEqual(result.decrypted, 63)
        self.assertIn("[RSA] Homomorphic multiplication: SUCCESS", self.out.getvalue())

    def test_sum_wrapping_past_half_modulus(self):
        n = PaillierParams().p * PaillierParams().q
        with redirect_stdout(self.out):
            result = run_paillier_addition([n // 2, 1], random_source=random.Random(4).randrange)
        self.assertEqual(result.decrypted, n // 2 + 1 - n)
        self.assertEqual(result.expected, result.decrypted)
        self.assertTrue(result.verified)

    def test_message_equal_to_modulus(self):
        n = PaillierParams().p * PaillierParams().q
        with redirect_stdout(self.out):
            result = run_paillier_addition([n, 1], random_source=random.Random(8).randrange)
        self.assertEqual(result.decrypted, 1)
        self.assertTrue(result.verified)
        self.assertIn("Homomorphic addition: SUCCESS", self.out.getvalue())

    def test_checked_primes(self):
        with redirect_stdout(self.out):
            result = run_rsa_multiplication("12", "-1", DemoParams(check_primes=True))
        # -1 aliases to n - 1 and (12 * -1) mod n is what decrypts
        self.assertTrue(result.verified)


class TestMenu(unittest.TestCase):

    def run_main(self, argv, *answers, params=None):
        out = io.StringIO()
        with redirect_stdout(out):
            code = main(argv, read=scripted_input(*answers), params=params)
        return code, out.getvalue()

    def test_demo_flag(self):
        code, text = self.run_main(["--demo"])
        self.assertEqual(code, 0)
        self.assertIn("Homomorphic addition: SUCCESS", text)
        self.assertIn("Homomorphic multiplication: SUCCESS", text)

    def test_exit_immediately(self):
        code, text = self.run_main([], "3")
        self.assertEqual(code, 0)
        self.assertEqual(text.count("Choose an operation:"), 1)
        self.assertIn("Have a nice day!", text)

    def test_addition_then_multiplication(self):
        _, text = self.run_main([], "1", "3", "5", "-3", "10", "2", "7", "9", "3")
        self.assertIn("[Paillier] Decrypted Result: 12", text)
        self.assertIn("[RSA] Decrypted Result: 63", text)

    def test_invalid_choice_and_number(self):
        _, text = self.run_main([], "9", "2", "seven", "7", "9", "3")
        self.assertIn("Invalid choice!", text)
        self.assertIn("Invalid number", text)
        self.assertIn("[RSA] Decrypted Result: 63", text)

    def test_end_of_input_stops_loop(self):
        code, text = self.run_main([], "2", "7")
        self.assertEqual(code, 0)
        self.assertIn("Have a nice day!", text)

    def test_key_errors_are_reported(self):
        params = DemoParams(paillier=PaillierParams(3, 7), rsa=RSAParams(11, 13, 3))
        code, text = self.run_main([], "1", "1", "5", "2", "7", "9", "3", params=params)
        self.assertEqual(code, 0)
        self.assertEqual(text.count("Error: "), 2)
        self.assertIn("Have a nice day!", text)

    def test_message_count_must_be_positive(self):
        params = DemoParams()
        out = io.StringIO()
        with redirect_stdout(out):
            result = menu_paillier_addition(params, scripted_input("0"))
        self.assertIsNone(result)
        self.assertIn("At least one message is required.", out.getvalue())


if __name__ == '__main__':
    unittest.main()
