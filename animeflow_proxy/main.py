import logging

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from animeflow_proxy.configs import settings
from animeflow_proxy.middleware import DocsAccessControlMiddleware
from animeflow_proxy.routes import api_router

logging.basicConfig(level=settings.log_level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
app = FastAPI(title="AnimeFlow Proxy")
app.add_middleware(
    CORSMiddleware,
    allow_origin_regex=".*",
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
)
app.add_middleware(DocsAccessControlMiddleware)


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


app.include_router(api_router, prefix="/api", tags=["anime"])


def run():
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8888, log_level="info")


if __name__ == "__main__":
    run()
