"""Application-wide constants and configuration values."""

# Leading whitespace width that makes up one list nesting level.
LIST_INDENT_UNIT = 2

# Tabs in list indentation are expanded to this many columns before measuring.
TAB_WIDTH = 4

# Column separator used by pipe tables in the generated minutes.
TABLE_COLUMN_SEPARATOR = "|"

# A separator row must contain at least this many consecutive dashes.
TABLE_SEPARATOR_MIN_DASHES = 3

# Heading text (case-insensitive prefix) that opens the discarded trailing transcript section.
TRANSCRIPT_HEADING_PREFIX = "transcri"

# Shown when neither the config nor the minutes provide a title.
UNTITLED_TITLE = "Untitled"

# Output extension for the exported document. The base name comes from the meeting title and date.
OUTPUT_DOCX_EXTENSION = "docx"

# Replacement for characters that are not allowed in file names.
FILENAME_SAFE_CHAR = "_"

# region sizing (points), shared by preview and export, theme-independent
HEADING_FONT_SIZES_PT = {1: 20.0, 2: 16.0, 3: 13.0}
HEADING_SPACING_PT = {1: (20.0, 10.0), 2: (15.0, 7.5), 3: (10.0, 5.0)}
TITLE_FONT_SIZE_PT = 26.0
BODY_FONT_SIZE_PT = 11.0
TABLE_FONT_SIZE_PT = 10.0
PARAGRAPH_SPACE_AFTER_PT = 6.0
LIST_ITEM_SPACE_AFTER_PT = 3.0
LIST_INDENT_STEP_PT = 18.0
BLANK_SPACER_PT = 6.0
TABLE_CELL_PADDING_PT = 4.0
PAGE_MARGIN_CM = 2.0
# endregion

# Fallback for get_debug_mode() in utils
DEBUG_MODE_DEFAULT = False  # Hard-coded default
