"""Read multipart uploads into IncomingFile values for the use cases."""

from fastapi import UploadFile

from campus_cms.infrastructure.external.storage.uploads import IncomingFile


async def read_upload(file: UploadFile | None) -> IncomingFile | None:
    """Return the upload's bytes and metadata; None when no file was sent."""
    if file is None or not file.filename:
        return None
    data = await file.read()
    return IncomingFile(
        data=data,
        filename=file.filename,
        content_type=file.content_type or "application/octet-stream",
    )


async def read_uploads(files: list[UploadFile] | None) -> list[IncomingFile]:
    result: list[IncomingFile] = []
    for file in files or []:
        incoming = await read_upload(file)
        if incoming is not None:
            result.append(incoming)
    return result
