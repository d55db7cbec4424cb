from dishka import Provider as DishkaProvider

from kvb.util.di.scope import Scope


class Provider(DishkaProvider):
    """Base for KVB DI providers.

    Factories without an explicit scope live for the application lifetime.
    """

    scope = Scope.APP
