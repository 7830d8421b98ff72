"""
Summary: Public surface for container format detection.
Why: Give the registry, facade and tests one import path for sniffing.
"""

from .domain.formats import AudioFormat
from .usecases.sniffer import ASF_HEADER_GUID, HEADER_WINDOW, classify, sniff

__all__ = ["ASF_HEADER_GUID", "AudioFormat", "HEADER_WINDOW", "classify", "sniff"]
