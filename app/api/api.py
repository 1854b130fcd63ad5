from fastapi import APIRouter

from app.api.endpoints import auth, producers, categories, products

api_router = APIRouter()

# Include all API endpoint routers
api_router.include_router(auth.router, tags=["Authentication"])
api_router.include_router(producers.router, prefix="/producers", tags=["Producers"])
api_router.include_router(categories.router, prefix="/categories", tags=["Categories"])
api_router.include_router(products.router, prefix="/products", tags=["Products"])
