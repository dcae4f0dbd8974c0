from dotenv import load_dotenv

load_dotenv('.env')


from fastapi import FastAPI
from fastapi.routing import APIRoute
from api import main
from utils.app_helper import register_exception_handlers
from utils.app_logger import createLogger


logger = createLogger("app")

def custom_generate_unique_id(route: APIRoute) -> str:
    return f"{route.tags[0] if route.tags else 'default'}-{route.name}"


app = FastAPI(
    title="vendor-locator",
    generate_unique_id_function=custom_generate_unique_id
)


@app.get("/api/status")
async def status():
    return {"status": "API is running"}


register_exception_handlers(app)

app.include_router(main.api_router, prefix="/v1")
