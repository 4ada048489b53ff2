"""Convert Omarchy desktop themes into MangoWC theme bundles."""

__version__ = "0.3.0"
