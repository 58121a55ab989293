import subprocess
from importlib import metadata

DISTRIBUTION_NAME = 'crm-api'


def _git(*args: str) -> str:
    try:
        result = subprocess.run(['git', *args], capture_output=True, text=True, check=True)
    except (OSError, subprocess.CalledProcessError):
        return ''
    return result.stdout.strip()


def get_version() -> str:
    """
    Release tag on the checked out commit, else the short commit hash, else
    the installed package version
    """
    version = _git('describe', '--tags', '--exact-match') or _git('rev-parse', '--short', 'HEAD')
    if version:
        return version
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return 'unknown'


VERSION = get_version()
