"""
Batch Auto-Tag Module
Reconciles stored inventory tags with freshly generated suggestions
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict, dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple

from .auto_tagger import auto_tag_record, parse_tags_field, tags_changed
from .errors import InventoryError

NO_WINES_MESSAGE = "No wines found in inventory"


@dataclass
class BatchAutoTagResult:
    """Outcome of one reconciliation run"""
    success: bool = True
    processed: int = 0
    failed: int = 0
    errors: List[str] = field(default_factory=list)

    def to_dict(self):
        return asdict(self)


@dataclass
class TagPreview:
    """Proposed tag change for one wine"""
    id: object
    name: str
    current_tags: List[str]
    suggested_tags: List[str]
    changed: bool

    def to_dict(self):
        return asdict(self)


@dataclass
class PreviewResult:
    """Outcome of a preview run (no writes)"""
    success: bool
    previews: List[TagPreview] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def changed_count(self) -> int:
        return sum(1 for p in self.previews if p.changed)

    def to_dict(self):
        return asdict(self)


def _wine_name(wine) -> str:
    if isinstance(wine, Mapping):
        return str(wine.get('name') or wine.get('id') or 'unknown')
    return repr(wine)


class BatchAutoTagger:
    """Applies auto-generated tags across the whole inventory"""

    def __init__(self, store, logger=None, config=None):
        """
        Initialize batch auto-tagger

        Args:
            store: Inventory store with fetch_all_inventory() and update_inventory_tags()
            logger: Logger instance
            config: Optional configuration (parallel_processing, max_workers)
        """
        self.store = store
        self.logger = logger or logging.getLogger(__name__)
        self.parallel = bool(config and config.parallel_processing and config.max_workers > 1)
        self.max_workers = config.max_workers if config else 1

    def _fetch_wines(self) -> Tuple[Optional[List[Dict]], Optional[str]]:
        """Fetch all wines; returns (wines, None) or (None, error message)"""
        try:
            return list(self.store.fetch_all_inventory() or []), None
        except InventoryError as e:
            self.logger.error(str(e))
            return None, str(e)
        except Exception as e:
            self.logger.error(f"Batch auto-tagging failed: {e}")
            return None, f"Batch processing failed: {e}"

    def _suggest(self, wine: Mapping) -> Tuple[List[str], List[str], bool]:
        """Current tags, suggested tags and whether they differ"""
        current_tags = parse_tags_field(wine.get('tags'))
        suggested_tags = auto_tag_record(wine)
        return current_tags, suggested_tags, tags_changed(current_tags, suggested_tags)

    def _reconcile_wine(self, wine) -> Optional[str]:
        """
        Bring one wine's stored tags in line with its suggestion

        Returns:
            Optional[str]: None on success, otherwise an error message
        """
        name = _wine_name(wine)
        try:
            _, suggested_tags, changed = self._suggest(wine)
            if not changed:
                return None

            try:
                self.store.update_inventory_tags(wine.get('id'), suggested_tags)
            except InventoryError as e:
                self.logger.error(f"Failed to update wine {wine.get('id')}: {e}")
                return f"Failed to update wine {name}: {e}"

            self.logger.info(f"Updated tags for {name}: {suggested_tags}")
            return None
        except Exception as e:
            self.logger.error(f"Error processing wine {name}: {e}")
            return f"Error processing wine {name}: {e}"

    def batch_auto_tag_inventory(self) -> BatchAutoTagResult:
        """
        Auto-tag every wine, writing only the wines whose tags changed

        Returns:
            BatchAutoTagResult: Counts and per-wine error messages
        """
        result = BatchAutoTagResult()

        wines, error = self._fetch_wines()
        if error is not None:
            result.success = False
            result.errors.append(error)
            return result

        if not wines:
            result.errors.append(NO_WINES_MESSAGE)
            return result

        self.logger.info(f"Processing auto-tags for {len(wines)} wines...")

        if self.parallel:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                # map() keeps inventory order for the error list
                outcomes = list(executor.map(self._reconcile_wine, wines))
        else:
            outcomes = [self._reconcile_wine(wine) for wine in wines]

        for outcome in outcomes:
            if outcome is None:
                result.processed += 1
            else:
                result.failed += 1
                result.errors.append(outcome)

        result.success = result.failed == 0
        self.logger.info(
            f"Auto-tagging complete: {result.processed} processed, {result.failed} failed"
        )
        return result

    def preview_auto_tags(self) -> PreviewResult:
        """
        Show what auto-tagging would change without writing anything

        Returns:
            PreviewResult: One TagPreview per wine
        """
        wines, error = self._fetch_wines()
        if error is not None:
            return PreviewResult(success=False, error=error)

        if not wines:
            return PreviewResult(success=True, error=NO_WINES_MESSAGE)

        previews = []
        for wine in wines:
            try:
                current_tags, suggested_tags, changed = self._suggest(wine)
            except Exception as e:
                self.logger.warning(f"Could not generate tags for {_wine_name(wine)}: {e}")
                current_tags = parse_tags_field(wine.get('tags')) if isinstance(wine, Mapping) else []
                suggested_tags, changed = list(current_tags), False

            previews.append(TagPreview(
                id=wine.get('id') if isinstance(wine, Mapping) else None,
                name=_wine_name(wine),
                current_tags=current_tags,
                suggested_tags=suggested_tags,
                changed=changed,
            ))

        return PreviewResult(success=True, previews=previews)


def batch_auto_tag_inventory(store, logger=None, config=None) -> BatchAutoTagResult:
    """Run a reconciliation over the whole inventory"""
    return BatchAutoTagger(store, logger, config).batch_auto_tag_inventory()


def preview_auto_tags(store, logger=None, config=None) -> PreviewResult:
    """Preview reconciliation without writing"""
    return BatchAutoTagger(store, logger, config).preview_auto_tags()
