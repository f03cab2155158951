from __future__ import annotations

from pathlib import PurePath
from typing import Optional

from fastapi import FastAPI, HTTPException, Response, status
from pydantic import BaseModel, Field, validator

from bfjava.bf_interpreter import BrainfuckInterpreter, RuntimeFault, StepLimitExceeded
from bfjava.errors import UnmatchedBrackets, UsageError
from bfjava.transpiler import JavaTranspiler, Translation
from bfjava.wrapper import DEFAULT_OUTPUT

from .session import BuildRecord, BuildStore

JAVA_MEDIA_TYPE = "text/x-java-source"


class TranslateRequest(BaseModel):
    code: str = ""
    output_name: str = DEFAULT_OUTPUT
    class_name: Optional[str] = None

    @validator("class_name")
    def validate_class_name(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            raise ValueError("class_name must not be blank")
        return value


class TranslationPayload(BaseModel):
    class_name: str
    normalized: str
    body: str
    source: str
    line_count: int


class BuildPayload(TranslationPayload):
    build_id: str
    output_name: str


class RunRequest(BaseModel):
    code: str = ""
    input: str = ""
    max_steps: int = Field(default=100000, ge=1)


class RunPayload(BaseModel):
    output: str
    steps: int


def _translation_fields(translation: Translation) -> dict:
    return {
        "class_name": translation.class_name,
        "normalized": translation.normalized,
        "body": translation.body,
        "source": translation.source,
        "line_count": translation.line_count,
    }


def _unprocessable(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=detail)


def create_app(store: Optional[BuildStore] = None) -> FastAPI:
    build_store = store if store is not None else BuildStore()
    app = FastAPI(title="bfjava translation API", version="0.1.0")

    def _build_payload(record: BuildRecord) -> BuildPayload:
        return BuildPayload(
            build_id=record.build_id,
            output_name=record.output_name,
            **_translation_fields(record.translation),
        )

    def _get_record(build_id: str) -> BuildRecord:
        try:
            return build_store.get(build_id)
        except KeyError as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    @app.post("/api/translate", response_model=TranslationPayload)
    def translate_program(payload: TranslateRequest) -> TranslationPayload:
        try:
            translation = JavaTranspiler().translate_source(
                payload.code, payload.output_name, payload.class_name
            )
        except UnmatchedBrackets as exc:
            raise _unprocessable(exc.diagnostic) from exc
        except UsageError as exc:
            raise _unprocessable(str(exc)) from exc
        return TranslationPayload(**_translation_fields(translation))

    @app.post("/api/run", response_model=RunPayload)
    def run_program(payload: RunRequest) -> RunPayload:
        interpreter = BrainfuckInterpreter()
        try:
            output = interpreter.run(
                payload.code,
                input_text=payload.input,
                max_steps=payload.max_steps,
            )
        except UnmatchedBrackets as exc:
            raise _unprocessable(exc.diagnostic) from exc
        except StepLimitExceeded as exc:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
        except RuntimeFault as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
        return RunPayload(output=output, steps=interpreter.steps)

    @app.post("/api/build", response_model=BuildPayload, status_code=status.HTTP_201_CREATED)
    def create_build(payload: TranslateRequest) -> BuildPayload:
        try:
            record = build_store.create_build(
                code=payload.code,
                output_name=payload.output_name,
                class_name=payload.class_name,
            )
        except UnmatchedBrackets as exc:
            raise _unprocessable(exc.diagnostic) from exc
        except UsageError as exc:
            raise _unprocessable(str(exc)) from exc
        return _build_payload(record)

    @app.get("/api/build/{build_id}", response_model=BuildPayload)
    def get_build(build_id: str) -> BuildPayload:
        return _build_payload(_get_record(build_id))

    @app.get("/api/build/{build_id}/source")
    def get_build_source(build_id: str) -> Response:
        record = _get_record(build_id)
        file_name = PurePath(record.output_name).name
        return Response(
            content=record.translation.source + "\n",
            media_type=JAVA_MEDIA_TYPE,
            headers={"Content-Disposition": f'attachment; filename="{file_name}"'},
        )

    @app.delete("/api/build/{build_id}", status_code=status.HTTP_204_NO_CONTENT)
    def delete_build(build_id: str) -> Response:
        removed = build_store.remove(build_id)
        if not removed:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Unknown build id: {build_id}",
            )
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return app


__all__ = ["create_app"]
