"""
CSV Inventory Module
Offline inventory store backed by an exported inventory sheet, plus CSV reports
"""
import threading
from datetime import datetime
from pathlib import Path
from typing import Dict, List

import pandas as pd

from .auto_tagger import parse_tags_field
from .errors import InventoryError

REQUIRED_COLUMNS = ['id', 'name', 'type', 'flavor_notes', 'description', 'tags']


class CsvInventory:
    """Inventory store reading from and writing to an inventory CSV export"""

    def __init__(self, csv_path, logger):
        """
        Initialize CSV inventory

        Args:
            csv_path: Path to the inventory CSV
            logger: Logger instance
        """
        self.csv_path = Path(csv_path)
        self.logger = logger
        self._df = None
        self._dirty = False
        self._lock = threading.Lock()

    def _load(self) -> pd.DataFrame:
        with self._lock:
            return self._load_unlocked()

    def _load_unlocked(self) -> pd.DataFrame:
        if self._df is None:
            try:
                # Everything as text so ids like "007" survive
                df = pd.read_csv(self.csv_path, dtype=str, keep_default_na=False)
            except (OSError, ValueError) as e:
                raise InventoryError(f"Failed to fetch wines: {e}")

            for column in REQUIRED_COLUMNS:
                if column not in df.columns:
                    df[column] = ''

            self.logger.info(f"Loaded {len(df)} wines from: {self.csv_path}")
            self._df = df
        return self._df

    def fetch_all_inventory(self) -> List[Dict]:
        """Read every row as an inventory record"""
        df = self._load()
        records = df.to_dict(orient='records')
        for record in records:
            record['tags'] = parse_tags_field(record.get('tags'))
        return records

    def update_inventory_tags(self, record_id, tags: List[str]) -> Dict:
        """
        Replace the tags of one row (written to disk by save())

        Raises:
            InventoryError: If no row has the given id
        """
        with self._lock:
            df = self._load_unlocked()
            mask = df['id'] == str(record_id)
            if not mask.any():
                raise InventoryError(f"Wine {record_id} not found", record_id=record_id)

            df.loc[mask, 'tags'] = ', '.join(tags)
            self._dirty = True
            return df.loc[mask].iloc[0].to_dict()

    def save(self, output_path=None) -> str:
        """
        Write the inventory back to disk

        Args:
            output_path: Optional alternative path (defaults to the source file)

        Returns:
            str: Path written
        """
        output_path = Path(output_path) if output_path else self.csv_path
        df = self._load()
        output_path.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(output_path, index=False)
        self._dirty = False
        self.logger.info(f"Saved inventory CSV: {output_path}")
        return str(output_path)

    @property
    def has_changes(self) -> bool:
        return self._dirty


def export_preview_to_csv(preview_result, output_dir, logger, output_path=None) -> str:
    """
    Export a tag preview to a CSV report

    Args:
        preview_result: PreviewResult from the batch driver
        output_dir: Directory for timestamped reports
        logger: Logger instance
        output_path: Optional explicit path

    Returns:
        str: Path to created CSV file
    """
    if output_path is None:
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        output_path = Path(output_dir) / f'tag_preview_{timestamp}.csv'

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    rows = [
        {
            'id': preview.id,
            'name': preview.name,
            'current_tags': ', '.join(preview.current_tags),
            'suggested_tags': ', '.join(preview.suggested_tags),
            'changed': 'YES' if preview.changed else 'NO',
        }
        for preview in preview_result.previews
    ]
    df = pd.DataFrame(rows, columns=['id', 'name', 'current_tags', 'suggested_tags', 'changed'])
    df.to_csv(output_path, index=False)

    logger.info(f"Exported {len(rows)} previews to CSV: {output_path}")
    return str(output_path)
