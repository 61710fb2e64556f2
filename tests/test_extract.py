import http.client
import io
import json
import socket
import unittest
from unittest.mock import patch
from urllib.error import HTTPError, URLError

import numpy as np

from centraldeudores.errors import (
    DebtorLookupError,
    LookupErrorKind,
    ValidationError,
    ValidationErrorKind,
    classify_http_status,
    decode_error_messages,
)
from centraldeudores.extract.lookup import history_url, read_debtor_history
from centraldeudores.extract.payload import RECORD_COLUMNS, decode_history
from centraldeudores.extract.pipeline import lookup_debtor_chart
from centraldeudores.fetching import FetcherConfig, URLFetcher
from centraldeudores.sample_data import SAMPLE_RESPONSE


class _Logger:
    def __init__(self):
        self.messages = []

    def info(self, msg):
        self.messages.append(msg)

    def warning(self, msg):
        self.messages.append(msg)


class _FakeResponse:
    def __init__(self, payload: bytes):
        self._payload = payload

    def read(self) -> bytes:
        return self._payload

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


def _scenario_payload() -> bytes:
    def entity(name, situation, amount):
        return {"entidad": name, "situacion": situation, "monto": amount, "enRevision": False, "procesoJud": False}

    return json.dumps(
        {
            "status": 200,
            "results": {
                "identificacion": 20123456786,
                "denominacion": "EJEMPLO",
                "periodos": [
                    {"periodo": "202505", "entidades": [entity("A", 1, 866), entity("B", 1, 1500)]},
                    {
                        "periodo": "202504",
                        "entidades": [entity("A", 1, 1202), entity("B", 1, 1300), entity("C", 1, 400)],
                    },
                ],
            },
        }
    ).encode("utf-8")


def _http_error(code: int, body: bytes = b"") -> HTTPError:
    return HTTPError("https://example.test", code, "error", None, io.BytesIO(body))


class PayloadTests(unittest.TestCase):
    def test_decode_history_and_record_frame(self):
        history = decode_history(json.dumps(SAMPLE_RESPONSE).encode("utf-8"))

        self.assertEqual(history.identifier, "20123456786")
        self.assertEqual(history.display_name, "EMPRESA DE EJEMPLO S.A.")
        self.assertEqual(len(history.periods), 4)
        self.assertEqual(history.periods[0].entities[0].entity_name, "BANCO SANTANDER ARGENTINA S.A.")

        df = history.to_dataframe()
        self.assertListEqual(list(df.columns), RECORD_COLUMNS)
        self.assertEqual(len(df), 12)
        self.assertEqual(df["situation"].dtype, np.dtype("int64"))
        self.assertEqual(df["amount"].dtype, np.dtype("float64"))
        self.assertEqual(df.loc[0, "period"], "202506")

    def test_identifier_keeps_leading_zeros(self):
        body = b'{"results": {"identificacion": 1234567890, "periodos": []}}'
        self.assertEqual(decode_history(body).identifier, "01234567890")

    def test_null_amount_becomes_zero(self):
        body = (
            b'{"results": {"identificacion": 20123456786, "periodos": '
            b'[{"periodo": "202504", "entidades": [{"entidad": "A", "situacion": 1, "monto": null}]}]}}'
        )
        df = decode_history(body).to_dataframe()
        self.assertEqual(df.loc[0, "amount"], 0.0)
        self.assertFalse(df.loc[0, "under_review"])

    def test_unexpected_shape(self):
        bad_bodies = [
            b"",
            b"not json",
            b'{"status": 200}',
            b'{"results": {"identificacion": 20123456786}}',
            b'{"results": {"identificacion": 20123456786, "periodos": "x"}}',
            b'{"results": {"identificacion": 20123456786, "periodos": [{"periodo": "202504", '
            b'"entidades": [{"situacion": 1}]}]}}',
        ]
        for body in bad_bodies:
            with self.assertRaises(DebtorLookupError) as ctx:
                decode_history(body)
            self.assertEqual(ctx.exception.kind, LookupErrorKind.UNEXPECTED_SHAPE, body)

    def test_negative_amount_is_unexpected_shape(self):
        body = (
            b'{"results": {"identificacion": 20123456786, "periodos": '
            b'[{"periodo": "202504", "entidades": [{"entidad": "A", "situacion": 1, "monto": -5.0}]}]}}'
        )
        with self.assertRaises(DebtorLookupError) as ctx:
            decode_history(body)
        self.assertEqual(ctx.exception.kind, LookupErrorKind.UNEXPECTED_SHAPE)


class ErrorClassificationTests(unittest.TestCase):
    def test_classify_http_status(self):
        self.assertEqual(classify_http_status(404), LookupErrorKind.NOT_FOUND)
        self.assertEqual(classify_http_status(400), LookupErrorKind.BAD_REQUEST)
        self.assertEqual(classify_http_status(429), LookupErrorKind.RATE_LIMITED)
        self.assertEqual(classify_http_status(500), LookupErrorKind.SERVER_ERROR)
        self.assertEqual(classify_http_status(503), LookupErrorKind.SERVER_ERROR)
        self.assertEqual(classify_http_status(403), LookupErrorKind.FAILED)

    def test_decode_error_messages(self):
        self.assertEqual(
            decode_error_messages(b'{"status": 404, "errorMessages": ["No se encontraron datos"]}'),
            ["No se encontraron datos"],
        )
        self.assertEqual(decode_error_messages(b"<html>"), [])
        self.assertEqual(decode_error_messages(b""), [])


class FetcherTests(unittest.TestCase):
    def _fetcher(self):
        return URLFetcher(_Logger(), FetcherConfig(base_url="https://example.test/api/", timeout_sec=3))

    @patch("centraldeudores.fetching.urlopen")
    def test_fetch_sends_headers_and_timeout(self, mock_urlopen):
        mock_urlopen.return_value = _FakeResponse(b"{}")

        body = URLFetcher(_Logger(), FetcherConfig(user_agent="tests", timeout_sec=3)).fetch("https://example.test/x")

        self.assertEqual(body, b"{}")
        req = mock_urlopen.call_args[0][0]
        self.assertEqual(req.get_header("User-agent"), "tests")
        self.assertEqual(req.get_header("Accept"), "application/json")
        self.assertEqual(mock_urlopen.call_args[1]["timeout"], 3)

    @patch("centraldeudores.fetching.urlopen")
    def test_http_errors_are_classified(self, mock_urlopen):
        cases = {404: LookupErrorKind.NOT_FOUND, 400: LookupErrorKind.BAD_REQUEST,
                 429: LookupErrorKind.RATE_LIMITED, 502: LookupErrorKind.SERVER_ERROR,
                 418: LookupErrorKind.FAILED}
        for code, kind in cases.items():
            mock_urlopen.side_effect = _http_error(code, b'{"status": %d, "errorMessages": ["m"]}' % code)
            with self.assertRaises(DebtorLookupError) as ctx:
                self._fetcher().fetch("https://example.test/x")
            self.assertEqual(ctx.exception.kind, kind)
            self.assertEqual(ctx.exception.status, code)
            self.assertEqual(ctx.exception.upstream_messages, ["m"])

    @patch("centraldeudores.fetching.urlopen")
    def test_timeout_and_offline(self, mock_urlopen):
        mock_urlopen.side_effect = URLError(socket.timeout("timed out"))
        with self.assertRaises(DebtorLookupError) as ctx:
            self._fetcher().fetch("https://example.test/x")
        self.assertEqual(ctx.exception.kind, LookupErrorKind.TIMEOUT)

        mock_urlopen.side_effect = TimeoutError("read timed out")
        with self.assertRaises(DebtorLookupError) as ctx:
            self._fetcher().fetch("https://example.test/x")
        self.assertEqual(ctx.exception.kind, LookupErrorKind.TIMEOUT)

        mock_urlopen.side_effect = URLError(ConnectionRefusedError(111, "Connection refused"))
        with self.assertRaises(DebtorLookupError) as ctx:
            self._fetcher().fetch("https://example.test/x")
        self.assertEqual(ctx.exception.kind, LookupErrorKind.OFFLINE)
        self.assertTrue(ctx.exception.user_message)

    @patch("centraldeudores.fetching.urlopen")
    def test_protocol_failures(self, mock_urlopen):
        mock_urlopen.side_effect = http.client.IncompleteRead(b"")
        with self.assertRaises(DebtorLookupError) as ctx:
            self._fetcher().fetch("https://example.test/x")
        self.assertEqual(ctx.exception.kind, LookupErrorKind.FAILED)
        self.assertIsInstance(ctx.exception.__cause__, http.client.IncompleteRead)

        mock_urlopen.side_effect = http.client.RemoteDisconnected("closed")
        with self.assertRaises(DebtorLookupError) as ctx:
            self._fetcher().fetch("https://example.test/x")
        self.assertEqual(ctx.exception.kind, LookupErrorKind.OFFLINE)

    @patch("centraldeudores.fetching.urlopen")
    def test_malformed_url_is_a_generic_failure(self, mock_urlopen):
        with self.assertRaises(DebtorLookupError) as ctx:
            self._fetcher().fetch("not a url")
        self.assertEqual(ctx.exception.kind, LookupErrorKind.FAILED)
        mock_urlopen.assert_not_called()


class LookupTests(unittest.TestCase):
    def test_history_url(self):
        self.assertEqual(
            history_url("20123456786", "https://api.bcra.gob.ar/CentralDeDeudores/v1.0/"),
            "https://api.bcra.gob.ar/CentralDeDeudores/v1.0/Deudas/Historicas/20123456786",
        )

    @patch("centraldeudores.fetching.urlopen")
    def test_read_debtor_history(self, mock_urlopen):
        mock_urlopen.return_value = _FakeResponse(_scenario_payload())
        fetcher = URLFetcher(_Logger(), FetcherConfig(base_url="https://example.test/api"))

        history = read_debtor_history("20123456786", fetcher, _Logger())

        self.assertEqual(mock_urlopen.call_args[0][0].full_url, "https://example.test/api/Deudas/Historicas/20123456786")
        self.assertEqual(history.display_name, "EJEMPLO")


class PipelineTests(unittest.TestCase):
    @patch("centraldeudores.fetching.urlopen")
    def test_lookup_debtor_chart_end_to_end(self, mock_urlopen):
        mock_urlopen.return_value = _FakeResponse(_scenario_payload())
        logger = _Logger()

        chart = lookup_debtor_chart(logger, "20-12345678-6", fetcher=URLFetcher(logger))

        self.assertEqual(list(chart.period_axis), ["04/2025", "05/2025"])
        c = [s for s in chart.series if s.name == "C"][0]
        self.assertEqual([p.value for p in c.points], [400.0, None])
        self.assertEqual([p.value for p in chart.total_series.points], [2902.0, 2366.0])
        self.assertIn("Chart checks OK", logger.messages)

    @patch("centraldeudores.fetching.urlopen")
    def test_invalid_identifier_never_reaches_the_network(self, mock_urlopen):
        with self.assertRaises(ValidationError) as ctx:
            lookup_debtor_chart(_Logger(), "20123456785", fetcher=URLFetcher(_Logger()))

        self.assertEqual(ctx.exception.kind, ValidationErrorKind.BAD_CHECK_DIGIT)
        mock_urlopen.assert_not_called()

    @patch("centraldeudores.extract.pipeline.build_chart")
    @patch("centraldeudores.fetching.urlopen")
    def test_failed_lookup_skips_transforms(self, mock_urlopen, mock_build):
        mock_urlopen.side_effect = _http_error(404)

        with self.assertRaises(DebtorLookupError) as ctx:
            lookup_debtor_chart(_Logger(), "20123456786", fetcher=URLFetcher(_Logger()))

        self.assertEqual(ctx.exception.kind, LookupErrorKind.NOT_FOUND)
        mock_build.assert_not_called()

    @patch("centraldeudores.extract.pipeline.build_chart")
    @patch("centraldeudores.fetching.urlopen")
    def test_unexpected_shape_skips_transforms(self, mock_urlopen, mock_build):
        mock_urlopen.return_value = _FakeResponse(b'{"status": 200, "results": {}}')

        with self.assertRaises(DebtorLookupError) as ctx:
            lookup_debtor_chart(_Logger(), "20123456786", fetcher=URLFetcher(_Logger()))

        self.assertEqual(ctx.exception.kind, LookupErrorKind.UNEXPECTED_SHAPE)
        mock_build.assert_not_called()


if __name__ == "__main__":
    unittest.main()
