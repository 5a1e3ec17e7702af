"""
Protected access to uploaded images.

Files are only served to signed-in users, and only from inside
the uploads directory.
"""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse

from personnel_records.api.deps import get_current_user, get_upload_storage
from personnel_records.services.storage import UploadStorage

router = APIRouter(
    tags=["Uploads"],
    dependencies=[Depends(get_current_user)],
)


@router.get("/uploads/{file_path:path}")
def get_upload(
    file_path: str,
    storage: UploadStorage = Depends(get_upload_storage),
):
    try:
        path = storage.resolve(file_path)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid file path")
    except FileNotFoundError:
        raise HTTPException(status_code=404, detail="File not found")
    return FileResponse(path)
