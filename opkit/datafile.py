"""
Data file handling for Opkit.

This module loads and saves startup settings (page size, batch size and the
numeric encoding profile) from the .data.txt file using # SECTION markers.
"""

import os
from dataclasses import fields
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Optional, Union

if TYPE_CHECKING:
    from .context import Settings


# Data file constants
DATA_FILE_NAME = ".data.txt"
PAGE_SIZE_SECTION_MARKER = "# PAGE_SIZE"
BATCH_SIZE_SECTION_MARKER = "# BATCH_SIZE"
PROFILE_SECTION_MARKER = "# ENCODING_PROFILE"
SALT_SECTION_MARKER = "# ENCODING_SALT"
MIN_LENGTH_SECTION_MARKER = "# ENCODING_MIN_LENGTH"
ALPHABET_SECTION_MARKER = "# ENCODING_ALPHABET"
PREFIX_SECTION_MARKER = "# ENCODING_PREFIX"
LOG_FILE_SECTION_MARKER = "# LOG_FILE"

# Section marker -> Settings field
SECTION_FIELDS = {
    PAGE_SIZE_SECTION_MARKER: 'page_size',
    BATCH_SIZE_SECTION_MARKER: 'batch_size',
    PROFILE_SECTION_MARKER: 'encoding_profile',
    SALT_SECTION_MARKER: 'encoding_salt',
    MIN_LENGTH_SECTION_MARKER: 'encoding_min_length',
    ALPHABET_SECTION_MARKER: 'encoding_alphabet',
    PREFIX_SECTION_MARKER: 'encoding_prefix',
    LOG_FILE_SECTION_MARKER: 'log_file',
}

INT_FIELDS = {'page_size', 'batch_size', 'encoding_min_length'}
REQUIRED_FIELDS = {'page_size', 'batch_size', 'encoding_profile'}

# A section holding only this value means "no value" (e.g. no prefix, no log file)
NONE_VALUE = "none"


def default_data_file_path() -> Path:
    """The .data.txt next to the opkit package directory."""
    script_dir = os.path.dirname(os.path.abspath(__file__))
    return Path(os.path.dirname(script_dir)) / DATA_FILE_NAME


def _parse_value(field_name: str, raw: str):
    if raw.lower() == NONE_VALUE and field_name not in REQUIRED_FIELDS:
        return None
    if field_name in INT_FIELDS:
        return int(raw)
    return raw


def load_data_file(path: Optional[Union[str, Path]] = None) -> 'Settings':
    """
    Loads settings by parsing the .data.txt file based on # SECTION markers.

    The first non-empty, non-comment line after a marker is that section's
    value. Unknown markers and malformed values are logged and skipped.

    Args:
        path: Data file to read, defaults to .data.txt beside the package

    Returns:
        Settings populated from the file, defaults for anything missing
    """
    from .context import Settings
    from .logging import log_message

    settings = Settings()
    data_file_path = Path(path) if path is not None else default_data_file_path()

    log_message(f"Attempting to load data file: {data_file_path}")

    if not data_file_path.exists():
        log_message(f"Data file '{data_file_path.name}' not found. Using default settings.", level="WARNING")
        return settings

    try:
        with open(data_file_path, 'r', encoding='utf-8') as f:
            lines = f.readlines()
    except OSError as e:
        log_message(f"Error loading data file '{data_file_path}': {e}. Using default settings.", level="ERROR")
        return settings

    current_field = None
    seen = set()
    for i, line in enumerate(lines):
        # strip out any leading BOM / ZERO-WIDTH chars
        stripped_line = line.strip().lstrip('\ufeff\u200b\u00A0')

        if stripped_line in SECTION_FIELDS:
            current_field = SECTION_FIELDS[stripped_line]
            continue
        if not stripped_line:
            continue
        if stripped_line.startswith('#'):
            log_message(f"DEBUG: Skipping comment or unknown marker on line {i+1}: '{stripped_line}'", level="DEBUG")
            current_field = None
            continue
        if current_field is None:
            log_message(f"Line {i+1} is outside any section, skipping: '{stripped_line}'", level="WARNING")
            continue
        if current_field in seen:
            log_message(f"Extra value for '{current_field}' on line {i+1} ignored", level="WARNING")
            continue

        try:
            setattr(settings, current_field, _parse_value(current_field, stripped_line))
            seen.add(current_field)
        except ValueError:
            log_message(f"Malformed value for '{current_field}' on line {i+1}: '{stripped_line}'", level="WARNING")

    log_message(f"Loaded settings: page_size={settings.page_size}, batch_size={settings.batch_size}, "
                f"profile={settings.encoding_profile}")
    return settings


def settings_to_sections(settings: 'Settings') -> Dict[str, str]:
    """Render every settings field as marker -> value text."""
    marker_for = {name: marker for marker, name in SECTION_FIELDS.items()}
    sections = {}
    for f in fields(settings):
        value = getattr(settings, f.name)
        sections[marker_for[f.name]] = NONE_VALUE if value is None else str(value)
    return sections


def save_settings_to_data_file(settings: 'Settings', path: Optional[Union[str, Path]] = None):
    """
    Writes every setting to the data file, one # SECTION per field.

    Args:
        settings: Settings to persist
        path: Data file to write, defaults to .data.txt beside the package
    """
    from .logging import log_message

    data_file_path = Path(path) if path is not None else default_data_file_path()
    log_message(f"Attempting to save settings to data file: {data_file_path}")

    new_lines = []
    for marker, value in settings_to_sections(settings).items():
        if new_lines:
            new_lines.append('\n')
        new_lines.append(marker + '\n')
        new_lines.append(value + '\n')

    try:
        data_file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(data_file_path, 'w', encoding='utf-8') as f:
            f.writelines(new_lines)
        log_message(f"Settings saved to '{data_file_path.name}'.")
    except OSError as e:
        log_message(f"Error saving settings to data file '{data_file_path}': {e}", level="ERROR")
