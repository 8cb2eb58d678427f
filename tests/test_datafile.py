"""
Tests for loading and saving settings in the .data.txt format.
"""

from opkit.context import Settings
from opkit.datafile import load_data_file, save_settings_to_data_file, settings_to_sections


def write(path, text):
    path.write_text(text, encoding="utf-8")
    return path


class TestLoadDataFile:

    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_data_file(tmp_path / "absent.txt") == Settings()

    def test_sections_are_parsed(self, tmp_path):
        path = write(tmp_path / ".data.txt", (
            "# PAGE_SIZE\n"
            "2000\n"
            "\n"
            "# BATCH_SIZE\n"
            "250\n"
            "# ENCODING_PROFILE\n"
            "huawei\n"
            "# ENCODING_SALT\n"
            "my salt\n"
            "# ENCODING_MIN_LENGTH\n"
            "20\n"
            "# ENCODING_PREFIX\n"
            "none\n"
            "# LOG_FILE\n"
            "none\n"
        ))
        settings = load_data_file(path)
        assert settings.page_size == 2000
        assert settings.batch_size == 250
        assert settings.encoding_profile == "huawei"
        assert settings.encoding_salt == "my salt"
        assert settings.encoding_min_length == 20
        assert settings.encoding_prefix is None
        assert settings.log_file is None

    def test_malformed_values_are_skipped(self, tmp_path):
        path = write(tmp_path / ".data.txt", "# PAGE_SIZE\nlots\n# BATCH_SIZE\n10\n")
        settings = load_data_file(path)
        assert settings.page_size == Settings().page_size
        assert settings.batch_size == 10

    def test_comments_and_stray_lines(self, tmp_path):
        path = write(tmp_path / ".data.txt", (
            "stray line\n"
            "# PAGE_SIZE\n"
            "# an unknown marker ends the section\n"
            "300\n"
            "# BATCH_SIZE\n"
            "\ufeff40\n"
            "50\n"
        ))
        settings = load_data_file(path)
        assert settings.page_size == Settings().page_size
        assert settings.batch_size == 40

    def test_required_fields_reject_none(self, tmp_path):
        path = write(tmp_path / ".data.txt", "# ENCODING_PROFILE\nnone\n")
        assert load_data_file(path).encoding_profile == "none"


class TestSaveDataFile:

    def test_round_trip(self, tmp_path):
        settings = Settings(page_size=123, batch_size=7, encoding_profile="huawei",
                            encoding_salt="s", encoding_prefix="p-", log_file=None)
        path = tmp_path / "nested" / ".data.txt"
        save_settings_to_data_file(settings, path)
        assert load_data_file(path) == settings

    def test_every_field_has_a_section(self):
        sections = settings_to_sections(Settings())
        assert sections["# PAGE_SIZE"] == "5000"
        assert sections["# ENCODING_SALT"] == "none"
        assert len(sections) == 8
