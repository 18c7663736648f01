import json

from fastapi import Request
from fastapi.exceptions import RequestValidationError
import pytest
from sqlalchemy.exc import OperationalError

from stagepass.platform.exception.exception_handlers import (
    request_validation_handler,
    stagepass_error_handler,
    storage_error_handler,
    unexpected_error_handler,
)
from stagepass.platform.exception.exceptions import InsufficientInventoryError


def _request(path: str = '/api/reserveTickets') -> Request:
    return Request(
        {
            'type': 'http',
            'method': 'POST',
            'scheme': 'http',
            'server': ('testserver', 80),
            'path': path,
            'query_string': b'',
            'headers': [],
        }
    )


@pytest.mark.unit
class TestExceptionHandlers:
    @pytest.mark.asyncio
    async def test_validation_error_with_exception_context(self) -> None:
        # Custom validators raising ValueError leave the exception object in ctx
        exc = RequestValidationError(
            [
                {
                    'type': 'value_error',
                    'loc': ('path', 'reservation_id'),
                    'msg': "Value error, 'nope' is not a valid reservation number",
                    'input': 'nope',
                    'ctx': {'error': ValueError("'nope' is not a valid reservation number")},
                }
            ]
        )

        response = await request_validation_handler(_request('/api/reserveTickets/nope'), exc)

        assert response.status_code == 400
        assert json.loads(response.body) == {
            'detail': [
                {
                    'loc': ['path', 'reservation_id'],
                    'msg': "Value error, 'nope' is not a valid reservation number",
                    'type': 'value_error',
                }
            ]
        }

    @pytest.mark.asyncio
    async def test_domain_error_keeps_status_and_message(self) -> None:
        exc = InsufficientInventoryError(concert_id=7, requested=3)

        response = await stagepass_error_handler(_request(), exc)

        assert response.status_code == 409
        assert json.loads(response.body) == {
            'detail': 'Not enough tickets left for concert 7 (requested 3)'
        }

    @pytest.mark.asyncio
    async def test_storage_error_hides_driver_message(self) -> None:
        exc = OperationalError('UPDATE concert ...', {}, Exception('database is locked'))

        response = await storage_error_handler(_request(), exc)

        assert response.status_code == 500
        assert json.loads(response.body) == {'detail': 'Storage failure'}

    @pytest.mark.asyncio
    async def test_unexpected_error_is_generic_500(self) -> None:
        response = await unexpected_error_handler(_request(), RuntimeError('boom'))

        assert response.status_code == 500
        assert json.loads(response.body) == {'detail': 'Internal server error'}
