from fastapi import FastAPI, Depends, Request, Response
from .config import configure_logging, settings
from .dependencies import get_search_service
from .service import SearchService

configure_logging(settings.LOG_LEVEL)

app = FastAPI()


@app.get('/movies/search', responses={400: {'content': {'text/plain': {}}}, 500: {'content': {'text/plain': {}}}})
async def search_movies(request: Request, service: SearchService = Depends(get_search_service)):
    result = await service.handle(dict(request.query_params))
    media_type = 'application/json' if result.status_code == 200 else 'text/plain'
    return Response(content=result.body, status_code=result.status_code, media_type=media_type)
