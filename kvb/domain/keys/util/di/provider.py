from dishka import provide

from kvb.config import Config
from kvb.domain.keys.key_info import KeyInfoProvider
from kvb.domain.keys.port.client import ClientAccessor
from kvb.domain.keys.scanner import ClusterScanner, Scanner, ScanSettings, StandaloneScanner
from kvb.domain.keys.service import KeysService
from kvb.util.di.base import Provider
from kvb.util.di.scope import Scope


class KeysProvider(Provider):
    @provide(scope=Scope.APP)
    def get_scan_settings(self, config: Config) -> ScanSettings:
        return ScanSettings(count_max=config.scan.count_max, threshold=config.scan.threshold)

    @provide(scope=Scope.APP)
    def get_scanner(self, client_accessor: ClientAccessor, settings: ScanSettings) -> Scanner:
        return Scanner(
            standalone=StandaloneScanner(client_accessor, settings),
            cluster=ClusterScanner(client_accessor, settings),
        )

    @provide(scope=Scope.APP)
    def get_key_info_provider(self, client_accessor: ClientAccessor) -> KeyInfoProvider:
        return KeyInfoProvider.default(client_accessor)

    keys_service = provide(KeysService, scope=Scope.UOW)
