"""
Tests for batch reconciliation and preview of inventory tags
"""
from types import SimpleNamespace

from wine_tagger.batch_auto_tag import (
    NO_WINES_MESSAGE,
    BatchAutoTagger,
    batch_auto_tag_inventory,
    preview_auto_tags,
)
from wine_tagger.errors import InventoryError


def test_skip_on_equal_tags(make_store, sample_wines, logger):
    store = make_store([sample_wines[0]])

    result = BatchAutoTagger(store, logger).batch_auto_tag_inventory()

    assert store.updates == []
    assert result.to_dict() == {'success': True, 'processed': 1, 'failed': 0, 'errors': []}


def test_stored_json_tags_compare_equal(make_store, logger):
    wine = {'id': '9', 'name': 'House Red', 'type': 'Red Wine', 'tags': '["earthy", "berry"]'}
    store = make_store([wine])

    result = BatchAutoTagger(store, logger).batch_auto_tag_inventory()

    assert store.updates == []
    assert result.processed == 1


def test_write_on_diff(make_store, sample_wines, logger):
    store = make_store(sample_wines)

    result = BatchAutoTagger(store, logger).batch_auto_tag_inventory()

    assert store.updates == [
        ('2', ['buttery', 'citrus', 'floral', 'vanilla']),
        ('3', ['sweet', 'vanilla']),
    ]
    assert result.success is True
    assert result.processed == 3
    assert result.failed == 0
    assert result.errors == []


def test_per_record_update_failure_is_isolated(make_store, sample_wines, logger):
    for wine in sample_wines:
        wine['tags'] = []
    store = make_store(sample_wines, fail_ids={'2'})

    result = BatchAutoTagger(store, logger).batch_auto_tag_inventory()

    assert [record_id for record_id, _ in store.updates] == ['1', '2', '3']
    assert result.processed == 2
    assert result.failed == 1
    assert result.errors == ['Failed to update wine Lakeside Chardonnay: database unavailable']
    assert result.success is False


def test_unexpected_update_error_is_isolated(make_store, sample_wines, logger):
    store = make_store(sample_wines, fail_ids={'2'}, update_error=RuntimeError("connection reset"))

    result = BatchAutoTagger(store, logger).batch_auto_tag_inventory()

    assert result.processed == 2
    assert result.failed == 1
    assert result.errors == ['Error processing wine Lakeside Chardonnay: connection reset']


def test_malformed_record_is_isolated(make_store, sample_wines, logger):
    store = make_store(['not a wine record'] + sample_wines)

    result = BatchAutoTagger(store, logger).batch_auto_tag_inventory()

    assert result.processed == 3
    assert result.failed == 1
    assert result.errors[0].startswith("Error processing wine 'not a wine record':")


def test_empty_inventory_short_circuit(make_store, logger):
    store = make_store([])

    result = BatchAutoTagger(store, logger).batch_auto_tag_inventory()

    assert result.to_dict() == {
        'success': True,
        'processed': 0,
        'failed': 0,
        'errors': [NO_WINES_MESSAGE],
    }
    assert NO_WINES_MESSAGE == "No wines found in inventory"
    assert store.updates == []


def test_fetch_failure_short_circuit(make_store, logger):
    store = make_store(fetch_error=InventoryError("Failed to fetch wines: timeout"))

    result = BatchAutoTagger(store, logger).batch_auto_tag_inventory()

    assert result.to_dict() == {
        'success': False,
        'processed': 0,
        'failed': 0,
        'errors': ['Failed to fetch wines: timeout'],
    }
    assert store.updates == []


def test_unexpected_fetch_failure(make_store, logger):
    store = make_store(fetch_error=RuntimeError("boom"))

    result = batch_auto_tag_inventory(store, logger)

    assert result.success is False
    assert result.errors == ['Batch processing failed: boom']


def test_parallel_run_matches_sequential(make_store, sample_wines, logger):
    for wine in sample_wines:
        wine['tags'] = []
    config = SimpleNamespace(parallel_processing=True, max_workers=3)

    sequential = BatchAutoTagger(make_store(sample_wines, fail_ids={'1', '3'}), logger).batch_auto_tag_inventory()
    parallel_store = make_store(sample_wines, fail_ids={'1', '3'})
    parallel = BatchAutoTagger(parallel_store, logger, config).batch_auto_tag_inventory()

    assert parallel.to_dict() == sequential.to_dict()
    assert parallel.errors == [
        'Failed to update wine Estate Cabernet: database unavailable',
        'Failed to update wine Late Harvest: database unavailable',
    ]
    assert sorted(record_id for record_id, _ in parallel_store.updates) == ['1', '2', '3']


def test_preview_reports_changes_without_writing(make_store, sample_wines, logger):
    store = make_store(sample_wines)

    preview = BatchAutoTagger(store, logger).preview_auto_tags()

    assert preview.success is True
    assert preview.error is None
    assert store.updates == []
    assert [p.changed for p in preview.previews] == [False, True, True]
    assert preview.changed_count == 2

    first = preview.previews[0]
    assert first.id == '1'
    assert first.name == 'Estate Cabernet'
    assert first.current_tags == ['earthy', 'berry']
    assert first.suggested_tags == ['berry', 'earthy']

    third = preview.previews[2]
    assert third.current_tags == []
    assert third.suggested_tags == ['sweet', 'vanilla']


def test_preview_empty_inventory(make_store, logger):
    preview = preview_auto_tags(make_store([]), logger)

    assert preview.success is True
    assert preview.previews == []
    assert preview.error == NO_WINES_MESSAGE


def test_preview_fetch_failure(make_store, logger):
    store = make_store(fetch_error=InventoryError("Failed to fetch wines: HTTP 503"))

    preview = preview_auto_tags(store, logger)

    assert preview.to_dict() == {
        'success': False,
        'previews': [],
        'error': 'Failed to fetch wines: HTTP 503',
    }


def test_preview_malformed_record_is_unchanged(make_store, sample_wines, logger):
    preview = preview_auto_tags(make_store(['garbage'] + sample_wines), logger)

    assert preview.success is True
    assert len(preview.previews) == 4
    assert preview.previews[0].changed is False
    assert preview.previews[0].suggested_tags == []
