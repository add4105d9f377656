import pytest
from unittest.mock import patch, AsyncMock, MagicMock

from custody_service.app.main import startup_event, shutdown_event


@pytest.fixture
def mock_app():
    app = MagicMock()
    app.state = MagicMock()
    return app


@pytest.mark.asyncio
@patch('custody_service.app.main.initialize_data', new_callable=AsyncMock)
@patch('custody_service.app.main.ensure_indexes', new_callable=AsyncMock)
@patch('custody_service.app.main.connect_to_mongo', new_callable=AsyncMock)
@patch('custody_service.app.main.PymongoInstrumentor')
async def test_startup_event_connects_and_seeds(
    mock_pymongo_instrumentor,
    mock_connect_to_mongo,
    mock_ensure_indexes,
    mock_initialize_data,
    mock_app,
    tmp_path
):
    mock_client, mock_db = MagicMock(), MagicMock()
    mock_connect_to_mongo.return_value = (mock_client, mock_db)

    with patch('custody_service.app.main.app', mock_app), \
         patch('custody_service.app.main.settings.UPLOAD_DIR', str(tmp_path / "uploads")):
        await startup_event()

    mock_pymongo_instrumentor.return_value.instrument.assert_called_once()
    mock_connect_to_mongo.assert_awaited_once()
    assert mock_app.state.mongo_client is mock_client
    assert mock_app.state.db is mock_db
    mock_ensure_indexes.assert_awaited_once_with(mock_db)
    mock_initialize_data.assert_awaited_once()
    assert (tmp_path / "uploads").is_dir()


@pytest.mark.asyncio
@patch('custody_service.app.main.connect_to_mongo', new_callable=AsyncMock)
@patch('custody_service.app.main.PymongoInstrumentor')
async def test_startup_event_propagates_connection_failure(mock_pymongo_instrumentor, mock_connect_to_mongo, mock_app, tmp_path):
    mock_connect_to_mongo.side_effect = ConnectionError("Failed to connect to MongoDB")

    with patch('custody_service.app.main.app', mock_app), \
         patch('custody_service.app.main.settings.UPLOAD_DIR', str(tmp_path / "uploads")):
        with pytest.raises(ConnectionError):
            await startup_event()


@pytest.mark.asyncio
@patch('custody_service.app.main.close_mongo_connection')
async def test_shutdown_event_closes_client(mock_close, mock_app):
    mock_client = MagicMock()
    mock_app.state.mongo_client = mock_client

    with patch('custody_service.app.main.app', mock_app):
        await shutdown_event()

    mock_close.assert_called_once_with(mock_client)
    assert mock_app.state.mongo_client is None
