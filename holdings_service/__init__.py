"""Token holdings service.

Latest-snapshot resolution of address token balances and keyset-paginated
listings over them.
"""

__version__ = "0.1.0"
