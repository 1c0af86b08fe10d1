"""Capa de persistencia del progreso: un documento JSON por clave."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Callable

logger = logging.getLogger(__name__)

Document = Any
Transform = Callable[[Any], Any]


class ProgressStore:
    """Documentos JSON independientes bajo el directorio de datos de la aplicación."""

    def __init__(self, data_dir: Path) -> None:
        """Inicializar con ruta base."""
        self.data_dir = Path(data_dir)

    def path_for(self, key: str) -> Path:
        """Obtener ruta del documento de una clave."""
        return self.data_dir / f"{key}.json"

    def read(self, key: str) -> Document | None:
        """Leer un documento; `None` si no existe o no se puede interpretar.

        Un documento corrupto nunca bloquea al usuario: se trata como ausente
        y la siguiente escritura lo reemplaza.
        """
        path = self.path_for(key)
        if not path.exists():
            return None

        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable progress document %s: %s", path, e)
            return None

    def write(self, key: str, fn: Transform) -> Document:
        """Leer-modificar-escribir un documento completo.

        `fn` recibe el documento actual (o `None`) y devuelve el nuevo, que se
        persiste mediante reemplazo atómico del archivo.
        """
        document = fn(self.read(key))

        self.data_dir.mkdir(parents=True, exist_ok=True)
        path = self.path_for(key)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{key}.", suffix=".tmp", dir=self.data_dir)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.debug("Wrote progress document %s", path)
        return document

