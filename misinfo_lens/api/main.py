import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from misinfo_lens.api.v1.endpoints import router as v1_router
from misinfo_lens.core.config import config

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

app = FastAPI(
    title=config.PROJECT_NAME,
    version=config.VERSION,
    openapi_url=f"{config.API_PREFIX}/openapi.json"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(v1_router)


@app.get("/")
async def root():
    return {"message": "Welcome to the Misinfo Lens API! Check /docs for API documentation."}


@app.get("/health")
async def health_check():
    return {
        "status": "operational",
        "message": "The Misinfo Lens API is running smoothly.",
        "version": config.VERSION
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000, log_level="info")
