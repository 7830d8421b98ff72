"""Detection use cases."""

from .sniffer import ASF_HEADER_GUID, HEADER_WINDOW, classify, sniff

__all__ = ["ASF_HEADER_GUID", "HEADER_WINDOW", "classify", "sniff"]
