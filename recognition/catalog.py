"""
Award catalog
=============

The fixed configuration surface of the platform: award categories,
departments and location hubs. These are baked into the build and never
edited at runtime, so they live in a frozen structure built once at import.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Category:
    """One award/value dimension a nomination is filed under."""

    id: str
    title: str
    description: str
    icon: str


@dataclass(frozen=True)
class AwardCatalog:
    """Immutable bundle of categories, departments and locations."""

    categories: Tuple[Category, ...]
    departments: Tuple[str, ...]
    locations: Tuple[str, ...]

    def get_category(self, category_id: str) -> Optional[Category]:
        for category in self.categories:
            if category.id == category_id:
                return category
        return None

    def category_title(self, category_id: str, default: str = 'Service') -> str:
        category = self.get_category(category_id)
        return category.title if category else default

    def category_choices(self):
        return [(c.id, c.title) for c in self.categories]

    def department_choices(self):
        return [(d, d) for d in self.departments]

    def location_choices(self):
        return [(loc, loc) for loc in self.locations]


# Used when category grouping unexpectedly comes back empty
FALLBACK_CATEGORY_ID = 'c1'

CATALOG = AwardCatalog(
    categories=(
        Category(
            id='c1',
            title='Customer Obsession',
            description='Going above and beyond to delight our customers and partners.',
            icon='bi-heart',
        ),
        Category(
            id='c2',
            title='Innovation Champion',
            description='Thinking outside the box to drive efficiency and new ideas.',
            icon='bi-lightbulb',
        ),
        Category(
            id='c3',
            title='Quality First',
            description='Unwavering commitment to the highest standards of quality.',
            icon='bi-shield-check',
        ),
        Category(
            id='c4',
            title='Collaboration Hero',
            description='Breaking silos and working effectively across teams.',
            icon='bi-people',
        ),
        Category(
            id='c5',
            title='Inspiring Leadership',
            description='Leading by example and empowering others to succeed.',
            icon='bi-award',
        ),
    ),
    departments=(
        'Sales', 'CBU', 'R&D', 'Supply Chain', 'P&O', 'Finance',
        'Digital Technologies', 'Commercial', 'Corporate Affairs', 'DCOM', 'Other',
    ),
    locations=(
        'South Korea', 'Hong Kong', 'Taiwan', 'Malaysia', 'Singapore',
        'Thailand', 'Vietnam', 'Philippines', 'Indonesia', 'Other',
    ),
)
