"""Decrypt EasyAntiCheat cache images and create digest features.

The cache image downloaded by the client is protected by a custom,
position dependent byte transform. Decrypting it reveals a PE image.
Digests of both forms allow correlation of the same cache seen in either
state.
"""

import ssdeep
from azul_runner import BinaryPlugin, Feature, Job, add_settings, cmdline_run

from .eac_cache.crypto import decrypt_cache, get_sha1_hash
from .eac_cache.filesystem import PE_SIGNATURE, verify_signature


class AzulPluginEacCache(BinaryPlugin):
    """Decrypt EasyAntiCheat cache images and create digest features."""

    CONTACT = "ASD's ACSC"
    VERSION = "2026.10.17"
    SETTINGS = add_settings(filter_max_content_size=(int, 10 * 1024 * 1024), filter_data_types={"content": []})
    FEATURES = [
        Feature("eac_cache_sha1", "SHA1 hash digest of the encrypted cache image"),
        Feature("eac_decrypted_sha1", "SHA1 hash digest of the decrypted cache image"),
        Feature("eac_decrypted_ssdeep", "Fuzzy digest of the decrypted cache image"),
        Feature("eac_decrypted_size", "Size in bytes of the decrypted cache image", type=int),
    ]

    def ssdeep_digest(self, data):
        """Return the SSDeep fuzzyhash of supplied data."""
        return ssdeep.hash(data)

    def execute(self, job: Job):
        """Decrypt the sample and, if it is a cache image, return digest features."""
        sample_data = job.get_data().read()

        # Decrypt a private copy so the job data is never modified.
        image = bytearray(sample_data)
        decrypt_cache(image, len(image))

        # Anything which does not decrypt to a PE is not a cache image.
        if not verify_signature(image, PE_SIGNATURE):
            return

        self.add_feature_values("eac_cache_sha1", get_sha1_hash(sample_data))
        self.add_feature_values("eac_decrypted_sha1", get_sha1_hash(image))
        self.add_feature_values("eac_decrypted_ssdeep", self.ssdeep_digest(bytes(image)))
        self.add_feature_values("eac_decrypted_size", len(image))


def main():
    """Run plugin via command-line."""
    cmdline_run(plugin=AzulPluginEacCache)


if __name__ == "__main__":
    main()
