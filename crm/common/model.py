from importlib import import_module
from types import ModuleType
from typing import List

from loguru import logger

from crm import settings


def import_model_modules() -> List[ModuleType]:
    """
    Repositories register their collections (and indexes) on import.
    Looks for `models.py` in the registered boundaries.
    """
    model_modules = []
    for app in settings.BOUNDARIES:
        import_path = f'{settings.BASE_MODULE}.{app}.models'
        logger.debug(f'importing: {import_path}')
        model_modules.append(import_module(import_path))

    return model_modules
