from kvb.domain.keys.scanner.base import ScannerStrategy, ScanSettings
from kvb.domain.keys.scanner.cluster import ClusterScanner
from kvb.domain.keys.scanner.scanner import Scanner
from kvb.domain.keys.scanner.standalone import StandaloneScanner

__all__ = [
    "ClusterScanner",
    "ScanSettings",
    "Scanner",
    "ScannerStrategy",
    "StandaloneScanner",
]
