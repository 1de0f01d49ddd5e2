"""Library service: one GraphQL surface over the author, book and review stores."""

__version__ = "0.1.0"
