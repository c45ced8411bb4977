"""Exportación JSON de perfiles resueltos.

Por qué JSON:
- Interoperabilidad con otras herramientas y pipelines.
- Usa los alias camelCase (`displayName`, `avatarUrl`) del contrato público.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Sequence

from core.domain.models import InstagramProfile


def profiles_to_json(profiles: Sequence[InstagramProfile]) -> str:
    payload = [p.to_json_dict() for p in profiles]
    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True)


def export_profiles_json(*, profiles: Sequence[InstagramProfile], output_path: Path) -> Path:
    """Exporta los perfiles a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(profiles_to_json(profiles) + "\n", encoding="utf-8")
    return output_path
