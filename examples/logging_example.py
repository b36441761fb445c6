"""Demonstrates how to enable and configure logging in id3kit.

id3kit logging is disabled by default. Users opt in by calling ``enable_logging()``,
which returns a ``LoggingHandle``. The handle can be used as a context manager
(``with enable_logging(): ...``) or disabled manually via ``handle.disable()``.

Key concepts shown here:

- ``level``: ``"FIT"`` (the default, numeric value 25) shows one line per
  pipeline stage; ``"DEBUG"`` adds every split decision the builder makes.
- ``log_format``: ``"short"`` shows ``timestamp | level | function - message``;
  ``"full"`` adds the module and line number.
- Automatic cleanup: logging is re-disabled when the context manager exits.
"""

from id3kit import Dataset, build_tree, enable_logging, extract_rules, predict

weather = Dataset(
    [
        ("no", "sunny", "hot", "high", "weak"),
        ("no", "sunny", "hot", "high", "strong"),
        ("yes", "overcast", "hot", "high", "weak"),
        ("yes", "rain", "mild", "high", "weak"),
        ("yes", "rain", "cool", "normal", "weak"),
        ("no", "rain", "cool", "normal", "strong"),
        ("yes", "overcast", "cool", "normal", "strong"),
        ("no", "sunny", "mild", "high", "weak"),
        ("yes", "sunny", "cool", "normal", "weak"),
        ("yes", "rain", "mild", "normal", "weak"),
        ("yes", "sunny", "mild", "normal", "strong"),
        ("yes", "overcast", "mild", "high", "strong"),
        ("yes", "overcast", "hot", "normal", "weak"),
        ("no", "rain", "mild", "high", "strong"),
    ],
    column_names=("play", "outlook", "temperature", "humidity", "wind"),
)

with enable_logging(level="DEBUG", log_format="full"):
    tree = build_tree(weather)

for rule in extract_rules(tree, column_names=weather.column_names):
    print(rule)

# "fog" never appeared under outlook, so the root's majority label is used.
print(predict(tree, ("?", "fog", "mild", "high", "weak")))
