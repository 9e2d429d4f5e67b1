"""prdeps - dependency health report for Node projects, posted to pull requests."""

__version__ = "1.0.0"
