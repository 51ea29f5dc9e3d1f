"""Schema management for domains persisted through SQLAlchemy providers.

The memory provider needs no schema, so only ``sqlite`` and ``postgresql``
providers are touched.
"""

from protean.domain import Domain
from sqlalchemy import create_engine

SQL_PROVIDERS = ("sqlite", "postgresql")


def _sql_providers(domain: Domain):
    return [provider for provider in domain.providers.values() if provider.conn_info["provider"] in SQL_PROVIDERS]


def _load_models(domain: Domain, provider) -> None:
    # Tables are added to the provider's metadata when each DAO is first built
    records = [*domain.registry.aggregates.values(), *domain.registry.entities.values()]
    for record in records:
        if record.cls.meta_.provider == provider.name:
            domain.repository_for(record.cls)._dao  # noqa: B018


def setup_db(domain: Domain) -> list[str]:
    """Create the tables of every aggregate and entity in ``domain``.

    Returns the names of the tables now known to the providers.
    """
    tables = []
    with domain.domain_context():
        for provider in _sql_providers(domain):
            _load_models(domain, provider)
            provider._metadata.create_all(create_engine(provider.conn_info["database_uri"]))
            tables.extend(provider._metadata.tables)
    return sorted(tables)


def drop_db(domain: Domain) -> None:
    """Drop the tables of every aggregate and entity in ``domain``."""
    with domain.domain_context():
        for provider in _sql_providers(domain):
            _load_models(domain, provider)
            provider._metadata.drop_all(create_engine(provider.conn_info["database_uri"]))
