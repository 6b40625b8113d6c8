"""twinpane: keyboard-driven dual-pane file manager."""

__version__ = '0.3.0'
