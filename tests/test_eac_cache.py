import unittest

import ssdeep
from azul_runner import FV, JobResult, State, test_template

from azul_plugin_eaccache.cache import AzulPluginEacCache
from azul_plugin_eaccache.eac_cache.crypto import decrypt_cache, encrypt_cache, get_sha1_hash


def make_cache_image(plaintext):
    """Encrypt plaintext the way the client does, returning the cache image bytes."""
    image = bytearray(plaintext)
    encrypt_cache(image, len(image))
    return bytes(image)


class TestEacCache(test_template.TestPlugin):
    PLUGIN_TO_TEST = AzulPluginEacCache

    @classmethod
    def setUpClass(cls) -> None:
        """Build a small PE-like image and its encrypted cache form."""
        super().setUpClass()
        # The last byte does not survive encrypt then decrypt, so pad the image by one byte.
        cls.plaintext = b"MZ\x90\x00" + bytes(60) + b"This program cannot be run in DOS mode." + bytes(range(256)) + b"\x00"
        cls.cache_image = make_cache_image(cls.plaintext)

        decrypted = bytearray(cls.cache_image)
        decrypt_cache(decrypted, len(decrypted))
        cls.decrypted = bytes(decrypted)

    def test_decrypted_image(self):
        """Sanity check the test data itself."""
        self.assertNotEqual(self.cache_image[:2], b"MZ")
        self.assertEqual(self.decrypted[:-1], self.plaintext[:-1])

    def test_cache_features(self):
        """Digests of both the encrypted and decrypted image are produced."""
        result = self.do_execution(data_in=[("content", self.cache_image)])
        self.assertEqual(result.state, State(State.Label.COMPLETED))

        features = result.events[0].features
        self.assertEqual(features["eac_cache_sha1"], [FV(get_sha1_hash(self.cache_image))])
        self.assertEqual(features["eac_decrypted_sha1"], [FV(get_sha1_hash(self.decrypted))])
        self.assertEqual(features["eac_decrypted_ssdeep"], [FV(ssdeep.hash(self.decrypted))])
        self.assertEqual(features["eac_decrypted_size"], [FV(len(self.plaintext))])

    def test_plaintext_not_featured(self):
        """An already decrypted PE does not decrypt to a PE, so is ignored."""
        result = self.do_execution(data_in=[("content", self.plaintext)])
        self.assertJobResult(result, JobResult(state=State(State.Label.COMPLETED_EMPTY)))

    def test_other_content_not_featured(self):
        """Content which does not decrypt to a PE is ignored."""
        result = self.do_execution(data_in=[("content", bytes(8))])
        self.assertJobResult(result, JobResult(state=State(State.Label.COMPLETED_EMPTY)))


if __name__ == "__main__":
    unittest.main()
