"""
Transpiler options and their loading from JSON config files.

Options come from a ts2polymer JSON config file, from the target of a
tsconfig.json, or from command line flags (which win).
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

# tsconfig targets that still need ES5 output
ES5_TARGETS = ('es3', 'es5')


@dataclass
class TranspilerOptions:
    """Options controlling Polymer output."""
    es6: bool = False  # const declarations and arrow-function value factories
    polymer_version: int = 1
    base_path: str = '.'  # root for linked template and style files

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TranspilerOptions':
        """Create options from a config mapping (camelCase keys)."""
        return cls(
            es6=bool(data.get('es6', False)),
            polymer_version=int(data.get('polymerVersion', 1)),
            base_path=str(data.get('basePath', '.')),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'es6': self.es6,
            'polymerVersion': self.polymer_version,
            'basePath': self.base_path,
        }


def _load_json(path: str) -> Optional[Dict[str, Any]]:
    try:
        with open(path, 'r') as f:
            return json.load(f)
    except FileNotFoundError:
        return None  # No config file is fine
    except json.JSONDecodeError as e:
        logger.warning('Failed to parse %s: %s', path, e)
        return None


def load_options(path: str) -> TranspilerOptions:
    """Load options from a JSON config file, falling back to defaults."""
    data = _load_json(path)
    if data is None:
        return TranspilerOptions()
    return TranspilerOptions.from_dict(data)


def options_from_tsconfig(path: str, options: Optional[TranspilerOptions] = None) -> TranspilerOptions:
    """
    Derive es6 output from a tsconfig.json compilation target.

    Args:
        path: Path to tsconfig.json
        options: Options to update; defaults are used when omitted

    Returns:
        The options, with es6 set when the target is newer than ES5
    """
    options = options or TranspilerOptions()
    data = _load_json(path)
    if data is None:
        return options

    target = str(data.get('compilerOptions', {}).get('target', 'es5')).lower()
    options.es6 = target not in ES5_TARGETS
    if options.base_path == '.':
        options.base_path = str(Path(path).parent)
    return options
