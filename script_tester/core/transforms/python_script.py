"""
PythonScriptTransform - executes a Python script once per trigger.

The script is compiled once during setup and executed with these globals:

- ``session``: the ProcessSession
- ``log``: a logger writing to the diagnostic stream
- ``REL_SUCCESS`` / ``REL_FAILURE``: the declared outcomes

Example script:

```python
record = session.get()
if record is not None:
    text = session.read(record).decode("utf-8")
    record = session.write(record, text.upper())
    session.transfer(record, REL_SUCCESS)
```
"""

import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from script_tester.core.errors import TransformSetupError
from script_tester.core.models import FAILURE, SUCCESS, RunConfiguration
from script_tester.core.transforms.base import Transform
from script_tester.core.transforms.session import ProcessSession
from script_tester.observability.logger import get_logger


class PythonScriptTransform(Transform):
    """
    Runs a Python script file as the transform body.
    """

    def __init__(self):
        super().__init__()
        self.script_path: Path | None = None
        self.module_paths: tuple[str, ...] = ()
        self._code = None
        self._log = get_logger("script_tester.script")

    @property
    def dialect(self) -> str:
        return "python"

    def setup(self, config: RunConfiguration) -> None:
        """
        Compile the script and check its module search paths.

        Raises:
            TransformSetupError: If the script cannot be read or compiled, or a
                module path does not exist
        """
        for module_path in config.module_paths:
            if not Path(module_path).exists():
                raise TransformSetupError(f"Module path does not exist: {module_path}")

        try:
            source = Path(config.script_path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise TransformSetupError(f"Cannot read script {config.script_path}: {e}") from e

        try:
            self._code = compile(source, str(config.script_path), "exec")
        except SyntaxError as e:
            raise TransformSetupError(
                f"Script {config.script_path} does not compile: {e.msg} (line {e.lineno})"
            ) from e

        self.script_path = Path(config.script_path)
        self.module_paths = tuple(config.module_paths)

    @contextmanager
    def runtime(self, config: RunConfiguration) -> Iterator[None]:
        """Prepend the module search paths to sys.path while the script runs."""
        saved = list(sys.path)
        sys.path[:0] = [str(Path(p).resolve()) for p in self.module_paths]
        try:
            yield
        finally:
            sys.path[:] = saved

    def on_trigger(self, session: ProcessSession) -> None:
        script_globals = {
            "__name__": "__script__",
            "__file__": str(self.script_path),
            "session": session,
            "log": self._log,
            "REL_SUCCESS": SUCCESS,
            "REL_FAILURE": FAILURE,
        }
        exec(self._code, script_globals)
