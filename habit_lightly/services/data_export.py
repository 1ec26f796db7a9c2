# habit_lightly/services/data_export.py

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import List, Dict, Any

import pandas as pd

from habit_lightly.core.models import AppState, InvalidArgument
from habit_lightly.core.serialization import state_to_dict

logger = logging.getLogger(__name__)

CSV_COLUMNS = ["date", "habit_id", "habit_name", "color", "archived"]
EXPORT_VERSION = "1.0"


def completion_rows(state: AppState) -> List[Dict[str, Any]]:
    """Одна строка на каждую отметку, по датам"""
    rows = []
    for date_key in sorted(state.days):
        for habit in state.habits:
            if habit.id in state.days[date_key]:
                rows.append({
                    "date": date_key,
                    "habit_id": habit.id,
                    "habit_name": habit.name,
                    "color": habit.color,
                    "archived": habit.archived
                })
    return rows


def export_state(state: AppState, format: str = "json") -> bytes:
    """Экспорт состояния в JSON или CSV"""
    fmt = format.lower()

    if fmt == "json":
        export_data = {
            "export_info": {
                "format": "json",
                "version": EXPORT_VERSION,
                "exported_at": datetime.now().isoformat(),
                "user_id": state.user_id
            },
            "state": state_to_dict(state)
        }
        logger.info(f"📤 JSON экспорт подготовлен ({len(state.habits)} привычек)")
        return json.dumps(export_data, ensure_ascii=False, indent=2).encode("utf-8")

    if fmt == "csv":
        rows = completion_rows(state)
        df = pd.DataFrame(rows, columns=CSV_COLUMNS)
        logger.info(f"📊 CSV экспорт подготовлен ({len(rows)} записей)")
        return df.to_csv(index=False).encode("utf-8")

    raise InvalidArgument(f"Неподдерживаемый формат экспорта: {format}")


def export_to_file(state: AppState, export_dir: Path, format: str = "json") -> Path:
    export_dir = Path(export_dir)
    export_dir.mkdir(parents=True, exist_ok=True)
    filename = export_dir / f"habits_{state.user_id}_{datetime.now().strftime('%Y%m%d_%H%M%S')}.{format.lower()}"
    filename.write_bytes(export_state(state, format))
    return filename
