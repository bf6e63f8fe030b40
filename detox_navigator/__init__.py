"""Home detox navigator: client records, derived views and local persistence.

The package keeps the clinical note-taking core (records, severity hints,
timeline, aftercare summary, persistence) isolated from any front end so it
can be exercised directly in tests.
"""

__version__ = "0.1.0"
