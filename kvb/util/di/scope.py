from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """Container lifetimes.

    APP holds store connections, scanners and the recommendation checker;
    UOW is entered once per HTTP request and holds the domain services.
    """

    APP = new_scope("APP")
    UOW = new_scope("UOW")
