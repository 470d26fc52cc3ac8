import json
from typing import Dict, List, Mapping, Sequence


class RowMapper:
    """
    Projects a header-keyed record onto the positional column order of a sheet.
    The header row belongs to the backend; the client never reorders it.
    """

    @staticmethod
    def map_row(header: Sequence[str], record: Mapping[str, str]) -> List[str]:
        row = []
        for name in header:
            value = record.get(name)
            row.append("" if value is None else str(value))
        return row

    @staticmethod
    def encode(row: Sequence[str]) -> str:
        return json.dumps(list(row), ensure_ascii=False)

    @staticmethod
    def decode(header: Sequence[str], encoded: str) -> Dict[str, str]:
        values = json.loads(encoded)
        if len(values) != len(header):
            raise ValueError(f"Row has {len(values)} cells but header has {len(header)}")
        return {name: value for name, value in zip(header, values) if name}
