"""
Default configuration values for ConfTree.

This module defines the constants that shape how a configuration tree is
addressed, coerced and rendered.
"""

# Separator between path segments, e.g. "database::pool::size"
KEY_DELIMITER = "::"

# Separator used when a string value is read as a list of strings
LIST_SEPARATOR = ";"

# Synthetic key under which an array-rooted document is stored
ROOT_ARRAY_KEY = "rootArray"

# Indentation used by ConfigContainer.serialize()
SERIALIZE_INDENT = 2

# Name under which the built-in JSON adapter is registered
DEFAULT_FORMAT = "json"
