import uvicorn

from fudge import config


if __name__ == "__main__":
    uvicorn.run("fudge.main:app", host=config.HOST, port=config.PORT, log_level=config.LOG_LEVEL.lower())
