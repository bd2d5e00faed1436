import json
import unittest

from mailsessions.models import SessionAddress, SessionOut, SessionRecord, SessionTime
from mailsessions.output import render_sessions, sessions_payload


def _session(**overrides) -> SessionOut:
    record = SessionRecord(
        sessionId="A",
        startTimestamp="2021-01-01T10:00:00.000000",
        endTimestamp="2021-01-01T10:00:05.000000",
        duration="00:00:05",
        client="foo",
        messageId="<m1@x>",
        to="b@x",
        status="sent",
        **{"from": "a@x"},
    )
    return record.model_copy(update=overrides).to_output()


class RenderSessionsTests(unittest.TestCase):
    def test_empty_result_is_empty_array(self) -> None:
        self.assertEqual(render_sessions([]), "[]\n")

    def test_keys_follow_output_layout(self) -> None:
        payload = sessions_payload([_session()])
        self.assertEqual(list(payload[0].keys()), ["time", "sessionid", "client", "messageid", "address", "status"])
        self.assertEqual(payload[0]["time"], {"start": "2021-01-01T10:00:00.000000", "duration": "00:00:05"})
        self.assertEqual(payload[0]["address"], {"from": "a@x", "to": "b@x"})
        self.assertNotIn("endTimestamp", json.dumps(payload))

    def test_rendering_is_tab_indented_and_newline_terminated(self) -> None:
        rendered = render_sessions([_session()])
        self.assertTrue(rendered.startswith('[\n\t{\n\t\t"time": {\n\t\t\t"start": '))
        self.assertTrue(rendered.endswith("}\n]\n"))
        self.assertEqual(json.loads(rendered)[0]["sessionid"], "A")

    def test_html_characters_are_not_escaped(self) -> None:
        rendered = render_sessions([_session(client="mx <relay> & co")])
        self.assertIn('"messageid": "<m1@x>"', rendered)
        self.assertIn('"client": "mx <relay> & co"', rendered)

    def test_non_ascii_is_kept_verbatim(self) -> None:
        rendered = render_sessions([_session(to="josé@exämple.org")])
        self.assertIn("josé@exämple.org", rendered)

    def test_address_accepts_field_name_or_alias(self) -> None:
        self.assertEqual(SessionAddress(from_="a@x").from_, "a@x")
        self.assertEqual(SessionAddress(**{"from": "a@x"}).from_, "a@x")
        out = SessionOut(time=SessionTime(), sessionid="Z", address=SessionAddress())
        self.assertEqual(out.model_dump(by_alias=True)["address"], {"from": "", "to": ""})


if __name__ == "__main__":
    unittest.main()
