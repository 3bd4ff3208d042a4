"""
Hisaab Bootstrap — Catalog Errors
=================================
A broken static catalog (dangling permission, unordered plan) would
silently mis-gate every request, so startup refuses instead.
"""


class CatalogIntegrityError(Exception):
    """
    Raised when a static catalog invariant is violated during boot.

    The process must not start serving requests.
    """

    def __init__(self, invariant: str, detail: str):
        self.invariant = invariant
        self.detail = detail
        super().__init__(
            f"HISAAB BOOTSTRAP FAILURE — {invariant}: {detail}"
        )
