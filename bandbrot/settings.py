"""
Default settings for the viewer, loaded from settings.json.

The JSON file sits next to this module. Missing keys fall back to the
built-in DEFAULTS, and an unreadable file only prints a warning.
"""

import json
import os


SETTINGS_PATH = os.path.join(os.path.dirname(__file__), 'settings.json')

# At this pixel delta the default window shows roughly the entire set
DEFAULTS = {
    'width': 800,
    'height': 800,
    'upper_left': [-1.95, 1.15],
    'pixel_delta': 0.0031415,
    'max_iterations': 256,
    'zoom_factor': 1.1,
    'workers': None,
}


def load_settings(path=SETTINGS_PATH):
    """
    Load settings from a JSON file, merged over DEFAULTS.

    Args:
        path: JSON file to read (default: the packaged settings.json)

    Returns:
        dict with every key of DEFAULTS
    """
    settings = dict(DEFAULTS)
    try:
        with open(path, 'r') as f:
            loaded = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        print(f"Warning: Could not load {os.path.basename(path)}: {e}")
        return settings

    if not isinstance(loaded, dict):
        print(f"Warning: Ignoring {os.path.basename(path)}: expected a JSON object")
        return settings

    unknown = set(loaded) - set(DEFAULTS)
    if unknown:
        print(f"Warning: Ignoring unknown settings: {', '.join(sorted(unknown))}")
    settings.update((k, v) for k, v in loaded.items() if k in DEFAULTS)
    return settings
