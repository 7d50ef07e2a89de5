"""Find masked byte patterns inside decrypted EasyAntiCheat cache images."""

from os import path

from azul_runner import (
    FV,
    BinaryPlugin,
    Feature,
    Job,
    add_settings,
    cmdline_run,
    settings,
)

from .eac_cache.config import load_config, locate_patterns
from .eac_cache.crypto import decrypt_cache
from .eac_cache.filesystem import PE_SIGNATURE, verify_signature

# Use this (non-default) config to configure the plugin search patterns.
EAC_CACHE_PLUGIN_CONFIG_PATH = path.join(path.dirname(__file__), "plugin_config.json")


class AzulPluginEacCacheSearch(BinaryPlugin):
    """Find masked byte patterns inside decrypted EasyAntiCheat cache images."""

    CONTACT = "ASD's ACSC"
    VERSION = "2026.10.17"
    SETTINGS = add_settings(
        filter_data_types={"content": []},
        filter_max_content_size=(int, 10 * 1024 * 1024),
    )
    # Feature both the configured patterns detected, and the decrypted
    # data which matched on the pattern.
    FEATURES = [
        Feature("eac_pattern", "Masked pattern detected in the decrypted cache image", type=bytes),
        Feature("eac_match_data", "Decrypted data which matched on the pattern", type=bytes),
    ]

    def __init__(self, config: settings.Settings | dict = None) -> None:
        """Preload config."""
        super().__init__(config)
        # Load in patterns the plugin is configured to search for.
        self.config = load_config(EAC_CACHE_PLUGIN_CONFIG_PATH)

    def execute(self, job: Job):
        """Decrypt the sample and scan it for the configured patterns."""
        image = bytearray(job.get_data().read())
        decrypt_cache(image, len(image))
        if not verify_signature(image, PE_SIGNATURE):
            return

        for match in locate_patterns(self.config, image):
            category, pattern, match_data, offset = match
            # Label our pattern and match_data features with the
            # categories of each pattern as per the config file.
            self.add_feature_values("eac_pattern", FV(pattern, label=category, offset=offset, size=len(pattern)))
            self.add_feature_values(
                "eac_match_data", FV(match_data, label=category, offset=offset, size=len(match_data))
            )


def main():
    """Run plugin via command-line."""
    cmdline_run(plugin=AzulPluginEacCacheSearch)


if __name__ == "__main__":
    main()
