import logging

from fastapi import FastAPI

from fudge import config
from fudge.db import init_db
from fudge.errors import install_error_handlers
from fudge.middleware.request_log import RequestLogMiddleware

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Модели импортируются внутри init_db(), до create_all()
init_db()


# ==== FastAPI app ====
app = FastAPI(title=config.APP_NAME)

# Лог запросов - только в режиме разработки
if config.ENV == "development":
    app.add_middleware(RequestLogMiddleware)

install_error_handlers(app)


# ==== Routers ====
from fudge.routers import auth as auth_router  # noqa: E402
from fudge.routers import sweets as sweets_router  # noqa: E402

app.include_router(auth_router.router)
app.include_router(sweets_router.router)


@app.get("/health")
def health():
    return {"status": "OK"}


logger.info("%s started in %s mode", config.APP_NAME, config.ENV)
