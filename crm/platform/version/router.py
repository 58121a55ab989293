from fastapi import APIRouter

from crm import settings

router = APIRouter()


@router.get('/api')
def get_app_version() -> dict:
    """Running build, for deploy checks"""
    from crm.version import VERSION

    return {'version': VERSION, 'environment': settings.ENVIRONMENT}
