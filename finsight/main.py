import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from finsight.database.connection import Base, SessionLocal, engine
from finsight.models import model  # noqa: F401 registers the tables
from finsight.repositories import category_crud
from finsight.repositories.settings import settings
from finsight.routers import (
    budget_router,
    category_router,
    expense_router,
    income_router,
    recurring_router,
    savings_router,
    summary_router,
    user_router,
)
from finsight.version import __version__

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    with SessionLocal() as db:
        category_crud.seed_categories(db)
    yield


app = FastAPI(title="finsight", version=__version__, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(user_router.user_Router)
app.include_router(category_router.category_Router)
app.include_router(income_router.income_Router)
app.include_router(expense_router.expense_Router)
app.include_router(recurring_router.recurring_Router)
app.include_router(summary_router.summary_Router)
app.include_router(budget_router.budget_Router)
app.include_router(savings_router.savings_Router)

if __name__ == "__main__":
    uvicorn.run("finsight.main:app", host="0.0.0.0", port=8000, reload=True)
