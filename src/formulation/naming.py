"""Identifier normalization for analysis and step names."""

import re

_ACRONYM_BOUNDARY = re.compile(r'([A-Z]+)([A-Z][a-z])')
_CAMEL_BOUNDARY = re.compile(r'([a-z\d])([A-Z])')
_NON_ALNUM_RUN = re.compile(r'[^a-z0-9]+')


def snake_case(text: str) -> str:
    """Convert a display name into a filesystem and identifier safe name.

    CamelCase boundaries become underscores, everything is lowercased, runs of
    non-alphanumeric characters collapse to a single underscore, and leading or
    trailing underscores are trimmed.

    Examples:
        'My Analysis' -> 'my_analysis'
        'HVACSizing - Run #2' -> 'hvac_sizing_run_2'
    """
    value = _ACRONYM_BOUNDARY.sub(r'\1_\2', text)
    value = _CAMEL_BOUNDARY.sub(r'\1_\2', value)
    return _NON_ALNUM_RUN.sub('_', value.lower()).strip('_')
