import datetime

from custody_service.app.models import DocumentDB, ReleaseRequestDB


def test_naive_stored_timestamps_are_read_back_as_utc():
    request = ReleaseRequestDB(
        user_id="user-1",
        asset_id="asset-1",
        created_at=datetime.datetime(2026, 1, 2, 3, 4, 5),
        processed_at=datetime.datetime(2026, 1, 3, 3, 4, 5),
    )

    assert request.created_at.tzinfo is datetime.UTC
    assert request.processed_at == datetime.datetime(2026, 1, 3, 3, 4, 5, tzinfo=datetime.UTC)
    assert request.model_dump(mode="json", by_alias=True)["createdAt"] == "2026-01-02T03:04:05Z"


def test_offset_timestamps_are_converted_to_utc():
    document = DocumentDB(
        user_id="user-1",
        type="deed",
        file_url="/uploads/x-deed.pdf",
        uploaded_at=datetime.datetime(2026, 1, 2, 5, 0, tzinfo=datetime.timezone(datetime.timedelta(hours=2))),
    )

    assert document.uploaded_at == datetime.datetime(2026, 1, 2, 3, 0, tzinfo=datetime.UTC)
    assert document.uploaded_at.utcoffset() == datetime.timedelta(0)
