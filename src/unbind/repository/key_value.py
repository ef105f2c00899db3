# SPDX-License-Identifier: MIT

import contextlib
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

from yaml import YAMLError, dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from unbind.errors import StorageError
from unbind.model.result import Err, Ok, Result


class KeyValueStore:
    """
    Local key-value persistence, one YAML document per key.

    Reads report failures as Err values. Writes replace the whole value
    atomically and raise StorageError on failure.
    """

    def __init__(self, data_path: Path) -> None:
        self.data_path = data_path

    def __path_for(self, key: str) -> Path:
        return self.data_path / f"{key}.yaml"

    def read(self, key: str) -> Result[Any]:
        """
        Read the value stored under key. A missing key reads as Ok(None).
        """
        file_path = self.__path_for(key)
        try:
            text = file_path.read_text()
        except FileNotFoundError:
            return Ok(None)
        except OSError as e:
            return Err(f"could not read {file_path}", e)

        try:
            return Ok(load(text, Loader=Loader))
        except YAMLError as e:
            return Err(f"could not parse {file_path}", e)

    def write(self, key: str, value: Any) -> None:
        file_path = self.__path_for(key)
        temp_path: Optional[Path] = None
        try:
            self.data_path.mkdir(parents=True, exist_ok=True)
            serialized = dump(value, Dumper=Dumper, sort_keys=False)
            # Write beside the target then rename so readers never see a partial file
            with tempfile.NamedTemporaryFile(
                mode="w",
                dir=self.data_path,
                prefix=f".{key}.",
                suffix=".tmp",
                delete=False,
            ) as tf:
                temp_path = Path(tf.name)
                tf.write(serialized)
            os.replace(temp_path, file_path)
        except (OSError, YAMLError) as e:
            if temp_path is not None:
                with contextlib.suppress(OSError):
                    temp_path.unlink(missing_ok=True)
            raise StorageError(f"could not write {file_path}: {e}") from e

    def remove(self, key: str) -> None:
        file_path = self.__path_for(key)
        try:
            file_path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"could not remove {file_path}: {e}") from e
