"""Environment and .env settings for the recolour-tool command.

The library never reads the environment; RecolourConfig is passed in
explicitly. Only the CLI host calls settings_from_env().

Load order (first wins):
  1. Existing OS environment variables — never overwrite.
  2. .env file at --env-file path (if explicitly provided).
  3. .env file walking up from cwd, stopping at .git (file or dir).

Recognised variables:
  RECOLOUR_BOX        default bounding box, e.g. 285x160
  RECOLOUR_PALETTE    built-in palette name (default, greyscale)
  RECOLOUR_RESAMPLER  resampler backend name (bilinear, nearest, pillow)
  RECOLOUR_LOG_LEVEL  logging level name (default WARNING)
"""

import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = 'RECOLOUR_'


@dataclass(frozen=True)
class Settings:
    box: str = '285x160'
    palette: str = 'default'
    resampler: str = 'bilinear'
    log_level: str = 'WARNING'


def _find_dotenv(start: Path) -> Path | None:
    """Walk up from start, return first .env found, stop at .git boundary."""
    current = start.resolve()
    while True:
        candidate = current / '.env'
        if candidate.is_file():
            return candidate
        # .git can be a dir (normal clone) or a file (worktree)
        if (current / '.git').exists():
            return None
        parent = current.parent
        if parent == current:
            return None
        current = parent


def _parse_dotenv(path: Path) -> dict[str, str]:
    """Parse a .env file into a dict. Handles KEY=value, KEY="value" and `export KEY=value`."""
    result: dict[str, str] = {}
    for line in path.read_text(encoding='utf-8').splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        key, _, raw_value = line.partition('=')
        key = key.strip().removeprefix('export ').strip()
        value = raw_value.strip().strip('"').strip("'")
        if key:
            result[key] = value
    return result


def load_env(env_file: str | None = None) -> Path | None:
    """Load .env into os.environ for keys not already set.

    Returns the path that was loaded, or None if no .env was found/used.
    """
    if env_file:
        path = Path(env_file)
        if not path.is_file():
            return None
    else:
        path = _find_dotenv(Path.cwd())
        if path is None:
            return None

    for key, value in _parse_dotenv(path).items():
        if key not in os.environ:
            os.environ[key] = value
    return path


def settings_from_env(environ: dict[str, str] | None = None) -> Settings:
    """Build Settings from RECOLOUR_* variables, falling back to defaults."""
    env = os.environ if environ is None else environ
    defaults = Settings()
    return Settings(
        box=env.get(f'{ENV_PREFIX}BOX') or defaults.box,
        palette=env.get(f'{ENV_PREFIX}PALETTE') or defaults.palette,
        resampler=env.get(f'{ENV_PREFIX}RESAMPLER') or defaults.resampler,
        log_level=(env.get(f'{ENV_PREFIX}LOG_LEVEL') or defaults.log_level).upper(),
    )
