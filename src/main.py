import logging
from contextlib import asynccontextmanager

import httpx
import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from settings import settings
from models import ExplainRequest, ExplainResult, PageKind, SummarizeRequest
from dispatcher import PageDispatcher, submit_label
from errors import ServiceError
from llm import build_http_client
from utils import with_start_time
from agents.article import ArticleAgent
from agents.selection import SelectionAgent
from agents.summarizer import SummarizerAgent
from agents.transcript import TranscriptAgent

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    datefmt="%H:%M:%S",
)
logging.getLogger("httpx").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


def build_dispatcher(client: httpx.AsyncClient, summarizer: SummarizerAgent) -> PageDispatcher:
    return PageDispatcher(
        handlers={
            PageKind.YOUTUBE: TranscriptAgent(client),
            PageKind.WIKIPEDIA: ArticleAgent(client),
            PageKind.SELECTION: SelectionAgent(),
        },
        summarize=summarizer.summarize,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with build_http_client() as client:
        app.state.http_client = client
        app.state.summarizer = SummarizerAgent(http_client=client)
        app.state.dispatcher = build_dispatcher(client, app.state.summarizer)
        logger.info("Relay ready at %s:%s (model %s)", settings.host, settings.port, settings.model_name)
        yield


app = FastAPI(title="plainsum relay", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_summarizer(request: Request) -> SummarizerAgent:
    return request.app.state.summarizer

def get_dispatcher(request: Request) -> PageDispatcher:
    return request.app.state.dispatcher


@app.get("/hello", response_class=PlainTextResponse)
async def hello():
    return "Hello world!"

@app.post("/summarize")
async def summarize_endpoint(payload: SummarizeRequest, summarizer: SummarizerAgent = Depends(get_summarizer)):
    text = payload.text.strip()
    if not text:
        raise HTTPException(status_code=400, detail="No text was provided to summarize.")
    try:
        summary = await summarizer.summarize(text)
    except ServiceError as exc:
        raise HTTPException(status_code=502, detail=str(exc))
    return summary.model_dump(exclude_none=True)

@app.post("/explain", response_model=ExplainResult)
async def explain(payload: ExplainRequest, dispatcher: PageDispatcher = Depends(get_dispatcher)):
    return await dispatcher.submit(payload.model_dump())

@app.get("/label")
async def label(url: str = ""):
    return {"label": submit_label(url)}

@app.get("/seek")
async def seek(url: str, start: float):
    return {"url": with_start_time(url, start)}

def run():
    uvicorn.run("main:app", host=settings.host, port=settings.port, reload=settings.debug)

if __name__ == "__main__":
    run()
