from typing import List, Optional, Union

from pydantic import BaseModel, Field


class Note(BaseModel):
    """Note metadata as supplied by the caller at evaluation time"""

    id: Union[str, int] = Field(description="Note identifier")
    title: str = Field(default="", description="Note title")
    tags: List[str] = Field(default_factory=list, description="Tag names attached to the note")
    created_at: int = Field(default=0, description="Creation time (unix seconds)")
    modified_at: int = Field(default=0, description="Last modification time (unix seconds)")
    file_path: Optional[str] = Field(default=None, description="Backing file, if any")
    deleted_at: Optional[int] = Field(default=None, description="Soft-delete time (unix seconds)")
    word_count: int = Field(default=0, description="Word count of the body")
    character_count: int = Field(default=0, description="Character count of the body")


class NoteWithContent(Note):
    """Note metadata plus its text body, for content-aware evaluation"""

    content: str = Field(default="", description="Note body")
