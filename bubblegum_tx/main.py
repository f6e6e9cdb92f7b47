import logging
from typing import List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from . import entrypoints
from .config import Settings, get_settings
from .entrypoints import BuildResult
from .ledger import Ledger, default_ledger

logging.basicConfig(level=logging.INFO)

app = FastAPI(title="bubblegum-tx")


class TreeBuildRequest(BaseModel):
    payer_secret: str


class MintBuildRequest(BaseModel):
    payer_secret: str
    tree_address: str
    name: str
    symbol: str
    uri: str
    royalty_bps: int = 0
    creator_share: int = 100


class TransferBuildRequest(BaseModel):
    payer_secret: str
    new_owner: str
    asset_id: Optional[str] = None
    nonce: Optional[int] = None
    data_hash: Optional[str] = None
    creator_hash: Optional[str] = None
    root: Optional[str] = None
    proof: Optional[List[str]] = None
    tree_address: Optional[str] = None


def get_ledger(settings: Settings = Depends(get_settings)) -> Ledger:
    return default_ledger(settings)


def respond(result: BuildResult):
    if result.ok:
        return result
    return JSONResponse(status_code=400, content=result.model_dump())


@app.get("/health")
def health(settings: Settings = Depends(get_settings)):
    return {"ok": True, "rpc": settings.solana_rpc}


@app.post("/tree/build", response_model=BuildResult)
def tree_build(
    req: TreeBuildRequest,
    settings: Settings = Depends(get_settings),
    ledger: Ledger = Depends(get_ledger),
):
    return respond(entrypoints.create_tree_config(req.payer_secret, settings=settings, ledger=ledger))


@app.post("/mint/build", response_model=BuildResult)
def mint_build(
    req: MintBuildRequest,
    settings: Settings = Depends(get_settings),
    ledger: Ledger = Depends(get_ledger),
):
    result = entrypoints.mint_v1(
        req.payer_secret,
        req.tree_address,
        req.name,
        req.symbol,
        req.uri,
        req.royalty_bps,
        req.creator_share,
        settings=settings,
        ledger=ledger,
    )
    return respond(result)


@app.post("/transfer/build", response_model=BuildResult)
def transfer_build(
    req: TransferBuildRequest,
    settings: Settings = Depends(get_settings),
    ledger: Ledger = Depends(get_ledger),
):
    result = entrypoints.transfer(
        req.payer_secret,
        req.new_owner,
        req.asset_id,
        req.nonce,
        req.data_hash,
        req.creator_hash,
        req.root,
        req.proof,
        req.tree_address,
        settings=settings,
        ledger=ledger,
    )
    return respond(result)
