"""Demo data generators."""

from store_credit.generators.customer import CustomerGenerator

__all__ = ["CustomerGenerator"]
