"""Run manifest writer.

A manifest records what a run did: resolved filter configuration, source,
counters, and the artifacts written (or the failure). Written atomically so
a crashed run never leaves half a manifest behind.
"""

from __future__ import annotations
from typing import Any, Dict
import json
import os

def write_manifest(path: str, manifest: Dict[str, Any]) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)
    tmp = path + ".tmp"
    with open(tmp, "w", encoding="utf-8") as f:
        json.dump(manifest, f, indent=2, ensure_ascii=False)
    os.replace(tmp, path)
