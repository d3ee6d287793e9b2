"""
Sample documents for demos and tests.

example_document() is the small fixed document used by `json-redact demo`.
SampleGenerator builds larger synthetic documents with Faker: people with
names, e-mail addresses, nested addresses and friend lists. All generated
data is fake, and a fixed seed gives the same document every time.
"""

from typing import Any, Dict, List

from faker import Faker

# Options used with example_document(); command-line equivalent:
#   json-redact --prune=tenItems --shuffle=tenItems,secretArray --preserve=friends,tenItems
EXAMPLE_OPTIONS = {
    'prune_keys': frozenset({'tenItems'}),
    'shuffle_keys': frozenset({'tenItems', 'secretArray'}),
    'preserve_keys': frozenset({'friends', 'tenItems'}),
}

EXAMPLE_COMMAND = (
    "json-redact --prune=tenItems \\\n"
    "            --shuffle=tenItems,secretArray \\\n"
    "            --preserve=friends,tenItems"
)


def example_document() -> Dict[str, Any]:
    """Return a fresh copy of the demo document."""
    return {
        'sensitiveString': "Don't show this to anyone!",
        'annualIncome': 1_000_000,
        'anotherObject': {
            'isEmployed': True,
        },
        'secretArray': [
            {'key': 'value'},
            {'cool': True},
            {'friends': 9000},
        ],
        'tenItems': [0, 1, 2, 3, 4, 5, 6, 7, 8, 9],
    }


class SampleGenerator:
    """Generates synthetic documents with Faker."""

    def __init__(self, seed: int = 42, locale: str = 'en_US'):
        """
        Initialize the generator.

        Args:
            seed: Random seed for reproducibility
            locale: Faker locale
        """
        self.seed = seed
        self.fake = Faker(locale)
        self.fake.seed_instance(seed)

    def person(self, n_friends: int = 3) -> Dict[str, Any]:
        """Generate one person record."""
        return {
            'id': self.fake.uuid4(),
            'name': self.fake.name(),
            'email': self.fake.email(),
            'age': self.fake.random_int(min=18, max=90),
            'balance': round(self.fake.pyfloat(min_value=0, max_value=10000, right_digits=2), 2),
            'active': self.fake.boolean(),
            'nickname': None,
            'address': {
                'street': self.fake.street_address(),
                'city': self.fake.city(),
                'postcode': self.fake.postcode(),
            },
            'friends': [self.fake.first_name() for _ in range(n_friends)],
        }

    def people(self, count: int, n_friends: int = 3) -> List[Dict[str, Any]]:
        """Generate `count` person records."""
        return [self.person(n_friends=n_friends) for _ in range(count)]

    def document(self, n_people: int = 10, n_friends: int = 3) -> Dict[str, Any]:
        """Generate an organization document holding a list of people."""
        return {
            'organization': self.fake.company(),
            'generatedFor': self.fake.email(),
            'verified': self.fake.boolean(),
            'people': self.people(n_people, n_friends=n_friends),
            'tags': self.fake.words(nb=5),
        }
