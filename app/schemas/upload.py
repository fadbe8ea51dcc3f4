# app/schemas/upload.py
from sqlmodel import SQLModel


class UploadRead(SQLModel):
    url: str
    filename: str


class MultiUploadRead(SQLModel):
    urls: list[str]
    errors: list[str] = []
