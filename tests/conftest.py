import copy
import logging

import pytest

from wine_tagger.errors import InventoryError

CONFIG_KEYS = [
    'INVENTORY_API_URL', 'INVENTORY_API_TIMEOUT', 'INVENTORY_API_TOKEN',
    'PARALLEL_PROCESSING', 'MAX_WORKERS', 'OUTPUT_DIR', 'LOGS_DIR',
    'LOG_LEVEL', 'VERBOSE_LOGGING',
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Remove config variables (including any set later by load_dotenv) and use tmp dirs"""
    for key in CONFIG_KEYS:
        # setenv first so undo also removes values load_dotenv adds
        monkeypatch.setenv(key, '')
        monkeypatch.delenv(key)
    monkeypatch.setenv('OUTPUT_DIR', str(tmp_path / 'output'))
    monkeypatch.setenv('LOGS_DIR', str(tmp_path / 'logs'))
    return tmp_path


@pytest.fixture
def logger():
    test_logger = logging.getLogger('test')
    test_logger.addHandler(logging.NullHandler())
    return test_logger


class FakeInventoryStore:
    """In-memory inventory store recording update calls"""

    def __init__(self, wines=None, fetch_error=None, fail_ids=(), update_error=None):
        self.wines = wines or []
        self.fetch_error = fetch_error
        self.fail_ids = set(fail_ids)
        self.update_error = update_error
        self.updates = []

    def fetch_all_inventory(self):
        if self.fetch_error:
            raise self.fetch_error
        return copy.deepcopy(self.wines)

    def update_inventory_tags(self, record_id, tags):
        self.updates.append((record_id, list(tags)))
        if record_id in self.fail_ids:
            raise self.update_error or InventoryError("database unavailable", record_id=record_id)
        return {'id': record_id, 'tags': list(tags)}


@pytest.fixture
def sample_wines():
    return [
        {
            'id': '1', 'name': 'Estate Cabernet', 'type': 'Red Wine',
            'flavor_notes': '', 'description': '', 'tags': ['earthy', 'berry'],
        },
        {
            'id': '2', 'name': 'Lakeside Chardonnay', 'type': 'White Wine',
            'flavor_notes': 'buttery with vanilla', 'description': '', 'tags': [],
        },
        {
            'id': '3', 'name': 'Late Harvest', 'type': 'Dessert Wine',
            'flavor_notes': 'honey and apricot', 'description': None, 'tags': None,
        },
    ]


@pytest.fixture
def make_store():
    return FakeInventoryStore
