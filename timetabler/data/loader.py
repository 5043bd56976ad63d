import pandas as pd
from pathlib import Path
import logging
from typing import Dict, List, Any, Optional

from .store import TimetableStore, COLLECTIONS
from .converter import DataConverter

logger = logging.getLogger(__name__)

# Collection name -> CSV file name
FILE_NAMES = {
    'courses': 'Courses.csv',
    'teachers': 'Teachers.csv',
    'rooms': 'Rooms.csv',
    'timings': 'Timings.csv',
    'timetable': 'Timetable.csv',
}


class CsvTimetableStore(TimetableStore):
    """
    Stores catalogs and the timetable as CSV files in one directory.

    Every read loads the file again, so edits made by other tools are
    picked up; every write rewrites the whole file.
    """

    def __init__(self, data_dir: Optional[str] = None, create: bool = False):
        """
        Initialize the store for a data directory.

        Args:
            data_dir: Directory holding the CSV files (defaults to cwd)
            create: Create the directory if it does not exist
        """
        self.data_dir = Path(data_dir) if data_dir else Path.cwd()
        self.converter = DataConverter()

        if not self.data_dir.exists():
            if not create:
                logger.error(f"Data directory not found at {self.data_dir}")
                raise FileNotFoundError(f"Data directory not found at {self.data_dir}")
            self.data_dir.mkdir(parents=True, exist_ok=True)
            logger.info(f"Created data directory {self.data_dir}")

        logger.debug(f"CSV store initialized at {self.data_dir}")

    def path_for(self, collection: str) -> Path:
        return self.data_dir / FILE_NAMES[collection]

    def load_frame(self, collection: str) -> pd.DataFrame:
        """
        Load the raw DataFrame of a collection.

        A missing or empty file is an empty collection.
        """
        path = self.path_for(collection)
        try:
            df = pd.read_csv(path, dtype=str, keep_default_na=False)
        except (pd.errors.EmptyDataError, FileNotFoundError):
            logger.debug(f"{FILE_NAMES[collection]} not found or empty, using empty dataset")
            return pd.DataFrame(columns=self.converter.COLUMNS[collection])

        logger.debug(f"{collection} loaded: {len(df)} records")
        return df

    def _read(self, collection: str) -> List[Any]:
        return self.converter.from_records(collection, self.load_frame(collection))

    def _write(self, collection: str, records: List[Any]) -> None:
        df = self.converter.to_records(collection, records)
        df.to_csv(self.path_for(collection), index=False)
        logger.debug(f"{collection} saved: {len(df)} records")

    def load_all(self) -> Dict[str, List[Any]]:
        """
        Load every collection and report cross-record issues.

        Returns:
            Dict: collection name -> list of records
        """
        data = {name: self._read(name) for name in COLLECTIONS}
        for name, records in data.items():
            logger.info(f"{name.capitalize()} loaded: {len(records)} records")

        issues = self.validate_relationships(data)
        if issues:
            logger.warning(f"Data loaded with {len(issues)} validation issues")
        else:
            logger.info("Data loaded and validated successfully")

        return data

    @staticmethod
    def validate_relationships(data: Dict[str, List[Any]]) -> List[str]:
        """
        Check timetable entries against the catalogs.

        Checks for:
        - Entries naming teachers, rooms or courses missing from the catalogs
        - Duplicate ids within a collection
        """
        validation_issues = []

        known = {
            'course': {c.name for c in data.get('courses', [])},
            'teacher': {t.name for t in data.get('teachers', [])},
            'room': {r.name for r in data.get('rooms', [])},
        }

        for entry in data.get('timetable', []):
            for field_name, names in known.items():
                value = getattr(entry, field_name)
                if value not in names:
                    issue = f"Entry {entry.id} references unknown {field_name}: {value}"
                    validation_issues.append(issue)
                    logger.warning(issue)

        for name, records in data.items():
            ids = [r.id for r in records]
            duplicates = {i for i in ids if ids.count(i) > 1}
            if duplicates:
                issue = f"Duplicate ids in {name}: {duplicates}"
                validation_issues.append(issue)
                logger.warning(issue)

        return validation_issues
