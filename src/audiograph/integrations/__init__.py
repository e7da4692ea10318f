"""Third-party integrations for audiograph.

Submodules
----------
qt
    Text measurement with Qt font metrics (requires ``PySide6``).
"""

from .qt import QtTextMeasurer as QtTextMeasurer
