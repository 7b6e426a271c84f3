"""
Assistant chat message endpoints.
"""

from typing import List
from fastapi import APIRouter, Depends, status

from nagrik_seva.models.message import Message, MessageCreate
from nagrik_seva.routes.deps import get_store
from nagrik_seva.services.issue_store import IssueStore

router = APIRouter(tags=["Messages"])


@router.get("/messages", response_model=List[Message])
async def list_messages(store: IssueStore = Depends(get_store)):
    """Get the chat history, oldest first."""
    return store.list_messages()


@router.post("/messages", response_model=Message, status_code=status.HTTP_201_CREATED)
async def create_message(message: MessageCreate, store: IssueStore = Depends(get_store)):
    return store.create_message(message)
