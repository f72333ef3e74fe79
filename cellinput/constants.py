"""Constants and configuration for the cellinput engine."""

class InputConstants:
    """Central configuration constants for the input control."""

    # View window
    DEFAULT_WINDOW_WIDTH = 1  # Width of a freshly created view window
    DEFAULT_WINDOW_OFFSET = 0

    # Rendering
    BLANK = " "  # Filler for columns past the end of the buffer
    DEFAULT_MASK_SYMBOL = "*"  # Substitute for every character in secret input

    # Settings persistence
    APP_NAME = "cellinput"
    APP_AUTHOR = "cellinput"
    SETTINGS_FILENAME = "settings.json"
