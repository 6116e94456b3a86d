from pydantic import BaseModel


class CompileRequest(BaseModel):
    code: str


class CompileResponse(BaseModel):
    success: bool
    output: str
    error: str | None = None
