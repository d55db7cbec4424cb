from kvb.domain.database.model import ConnectionType
from kvb.domain.keys.scanner.base import ScannerStrategy
from kvb.domain.keys.scanner.cluster import ClusterScanner
from kvb.domain.keys.scanner.standalone import StandaloneScanner
from kvb.domain.shared.error import ConnectionUnavailableError


class Scanner:
    """Selects the scan strategy for a database topology."""

    def __init__(self, standalone: StandaloneScanner, cluster: ClusterScanner) -> None:
        self._strategies: dict[ConnectionType, ScannerStrategy] = {
            ConnectionType.STANDALONE: standalone,
            ConnectionType.SENTINEL: standalone,
            ConnectionType.CLUSTER: cluster,
        }

    def get_strategy(self, connection_type: ConnectionType) -> ScannerStrategy:
        try:
            return self._strategies[connection_type]
        except KeyError:
            raise ConnectionUnavailableError(
                f"No scan strategy for connection type {connection_type}",
                code="CONNECTION_UNAVAILABLE",
            ) from None

    def for_client(self, is_cluster: bool) -> ScannerStrategy:
        """Strategy matching a live handle's actual topology."""
        return self._strategies[ConnectionType.CLUSTER if is_cluster else ConnectionType.STANDALONE]
