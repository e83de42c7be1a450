"""
Site configuration.

SubmitConfig loads an optional YAML file describing the site: which account
to charge, which binary to launch, where the GPU cache lives, and how restart
files are referenced in inputs. Every key has a default, so qsubmit runs
without any config file.

Example config.yaml:

    account: chm135
    executable: /sw/apps/quantum/bin/quantum.x
    gpu_cache_dir: /tmp/cuda_cache
    default_extension: .inp
    restart_keywords: [restart, guess]
    scratch_env: SCRATCH
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .errors import ConfigError

CONFIG_ENV = 'QSUBMIT_CONFIG'
USER_CONFIG = Path('~/.config/qsubmit/config.yaml')

DEFAULTS: Dict[str, Any] = {
    'account': None,
    'executable': 'quantum.x',
    'gpu_cache_dir': '/tmp/cuda_cache',
    'default_extension': '.inp',
    'restart_keywords': ['restart'],
    'scratch_env': 'SCRATCH',
    'invoking_dir_env': 'PWD',
}


class SubmitConfig:
    """
    Loads and validates the site configuration.

    Example:
        config = SubmitConfig.from_yaml('~/.config/qsubmit/config.yaml')
        print(config.account)
        print(config.scratch_root())
    """

    def __init__(self, data: Optional[Dict[str, Any]] = None, environ: Optional[Dict[str, str]] = None):
        self._data = dict(data or {})
        self._environ = os.environ if environ is None else environ
        self._validate()

    @classmethod
    def from_yaml(cls, path: str, environ: Optional[Dict[str, str]] = None) -> 'SubmitConfig':
        """Load config from YAML file."""
        path = Path(path).expanduser()
        if not path.exists():
            raise ConfigError(f"Config not found: {path}")

        try:
            with open(path, 'r') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Could not parse config {path}: {e}")

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config {path} must be a mapping of keys to values")
        return cls(data, environ=environ)

    def _validate(self):
        """Reject unknown keys and badly typed values."""
        unknown = sorted(set(self._data) - set(DEFAULTS))
        if unknown:
            raise ConfigError(f"Unknown config key(s): {', '.join(unknown)}")

        keywords = self._data.get('restart_keywords', DEFAULTS['restart_keywords'])
        if not isinstance(keywords, (list, tuple)) or not all(isinstance(k, str) for k in keywords):
            raise ConfigError("'restart_keywords' must be a list of strings")

    def _get(self, key: str) -> Any:
        return self._data.get(key, DEFAULTS[key])

    # --- Job script ---

    @property
    def account(self) -> str:
        """Account charged for the job; falls back to $SBATCH_ACCOUNT."""
        account = self._get('account') or self._environ.get('SBATCH_ACCOUNT')
        if not account:
            raise ConfigError("No account configured: set 'account' in the config or $SBATCH_ACCOUNT")
        return str(account)

    @property
    def executable(self) -> str:
        return str(self._get('executable'))

    @property
    def gpu_cache_dir(self) -> str:
        return str(self._get('gpu_cache_dir'))

    # --- Inputs ---

    @property
    def default_extension(self) -> str:
        return str(self._get('default_extension'))

    @property
    def restart_keywords(self) -> List[str]:
        return list(self._get('restart_keywords'))

    # --- Environment ---

    def scratch_root(self) -> Path:
        """Scratch root from the configured environment variable."""
        name = self._get('scratch_env')
        value = self._environ.get(name)
        if not value:
            raise ConfigError(f"Scratch root not set: ${name} is empty or undefined")
        return Path(value)

    def invoking_dir(self) -> Path:
        """Directory the user submits from ($PWD, else the process cwd)."""
        value = self._environ.get(self._get('invoking_dir_env'))
        if value:
            return Path(value)
        return Path.cwd()


def load_config(path: Optional[str] = None, environ: Optional[Dict[str, str]] = None) -> SubmitConfig:
    """
    Load the config from the first available source.

    Lookup order: explicit path, $QSUBMIT_CONFIG, ~/.config/qsubmit/config.yaml,
    then built-in defaults.
    """
    env = os.environ if environ is None else environ
    if path:
        return SubmitConfig.from_yaml(path, environ=env)
    if env.get(CONFIG_ENV):
        return SubmitConfig.from_yaml(env[CONFIG_ENV], environ=env)
    user_config = USER_CONFIG.expanduser()
    if user_config.exists():
        return SubmitConfig.from_yaml(str(user_config), environ=env)
    return SubmitConfig(environ=env)
