from fastapi import FastAPI

from license_bom.api.analysis import router as analysis_router

app = FastAPI(
    title="License Bill of Materials",
    version="1.0.0",
)

app.include_router(analysis_router, prefix="/api", tags=["Analysis"])


@app.get("/")
def root():
    return {"message": "License BOM backend is running"}
