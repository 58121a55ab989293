from fastapi import APIRouter, Response
from starlette import status

router = APIRouter()


@router.get('/api')
def status_get(response: Response) -> str:
    """
    Fast check to ensure API is running.
    Used by load balancers and deploy scripts, keep it cheap.
    """
    response.headers['Content-Type'] = 'text/html; charset=utf-8'
    return '📇 Customer records are up'


@router.get('/database')
def database_health_check(response: Response) -> str:
    """
    Fast check to ensure the document store answers a ping
    """
    from crm.network.database.connection import connection_manager

    is_healthy = connection_manager().ping()

    response.headers['Content-Type'] = 'text/html; charset=utf-8'
    response.status_code = status.HTTP_200_OK if is_healthy else status.HTTP_503_SERVICE_UNAVAILABLE
    return '✅ DB is happy' if is_healthy else '❌ DB is sad'
