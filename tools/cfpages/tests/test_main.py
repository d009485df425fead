import io
import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from rich.console import Console

from .. import main as main_module
from ..config import ClientConfig
from ..core import client as client_module
from ..core.client import CloudFoundryClient
from ..errors import CardinalityError, ConfigError
from .helpers import list_payload, resource_payload
from .test_client import FakeSession, make_response


class TestRun(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.output = io.StringIO()
        self.console = Console(file=self.output, width=200)
        self.config = ClientConfig(api_host="https://api.example.com", token="t", results_per_page=2, retry_delay=0)

    def parse(self, *argv):
        return main_module.build_parser().parse_args(list(argv))

    async def test_lists_with_filters_as_json(self):
        session = FakeSession(pages={"/v2/apps": [
            list_payload(["a1", "a2"], total_pages=2, total_results=3),
            list_payload(["a3"], total_pages=2, total_results=3),
        ]})
        client = CloudFoundryClient(self.config, session=session)
        args = self.parse("applications", "--filter", "space_id=s1", "--json")

        code = await main_module.run(args, client, self.console)

        self.assertEqual(code, main_module.EXIT_OK)
        self.assertEqual(len(session.urls), 2)
        printed = self.output.getvalue()
        for guid in ("a1", "a2", "a3"):
            self.assertIn(guid, printed)

    async def test_limit_stops_after_first_page(self):
        session = FakeSession(pages={"/v2/spaces": [
            list_payload(["s1", "s2"], total_pages=2),
            list_payload(["s3"], total_pages=2),
        ]})
        client = CloudFoundryClient(self.config, session=session)

        await main_module.run(self.parse("spaces", "--limit", "2"), client, self.console)

        self.assertEqual(len(session.urls), 1)

    async def test_single_raises_cardinality_error(self):
        session = FakeSession(pages={"/v2/organizations": [list_payload([], total_pages=1)]})
        client = CloudFoundryClient(self.config, session=session)

        with self.assertRaises(CardinalityError):
            await main_module.run(self.parse("organizations", "--filter", "name=x", "--single"), client, self.console)

    async def test_related_listing(self):
        session = FakeSession(pages={"/v2/routes/r1/apps": [list_payload(["a1"], total_pages=1)]})
        client = CloudFoundryClient(self.config, session=session)

        await main_module.run(self.parse("routes", "--related", "r1", "apps"), client, self.console)

        self.assertIn("a1", self.output.getvalue())

    async def test_related_listing_keeps_order_direction(self):
        session = FakeSession(pages={"/v2/organizations/o1/spaces": [list_payload(["s1"], total_pages=1)]})
        client = CloudFoundryClient(self.config, session=session)

        await main_module.run(
            self.parse("organizations", "--related", "o1", "spaces", "--order_direction", "desc"), client, self.console
        )

        self.assertEqual(session.query(0)["order-direction"], ["desc"])

    async def test_listing_with_order_direction(self):
        session = FakeSession(pages={"/v2/apps": [list_payload(["a1"], total_pages=1)]})
        client = CloudFoundryClient(self.config, session=session)

        await main_module.run(self.parse("applications", "--order_direction", "asc"), client, self.console)

        self.assertEqual(session.query(0)["order-direction"], ["asc"])

    async def test_single_or_none_with_no_match_prints_nothing(self):
        session = FakeSession(pages={"/v2/spaces": [list_payload([], total_pages=0)]})
        client = CloudFoundryClient(self.config, session=session)

        code = await main_module.run(
            self.parse("spaces", "--filter", "name=missing", "--single_or_none", "--json"), client, self.console
        )

        self.assertEqual(code, main_module.EXIT_OK)
        self.assertEqual(self.output.getvalue(), "")

    async def test_single_or_none_with_one_match(self):
        session = FakeSession(pages={"/v2/spaces": [list_payload(["s1"], total_pages=1)]})
        client = CloudFoundryClient(self.config, session=session)

        await main_module.run(self.parse("spaces", "--single_or_none", "--json"), client, self.console)

        self.assertIn("s1", self.output.getvalue())

    async def test_get_resource_by_id(self):
        session = FakeSession(responses={
            "/v2/buildpacks/bp-1": [make_response(payload=resource_payload("bp-1", name="python_buildpack"))]
        })
        client = CloudFoundryClient(self.config, session=session)

        await main_module.run(self.parse("buildpacks", "--get", "bp-1", "--json"), client, self.console)

        printed = json.loads(self.output.getvalue())
        self.assertEqual(printed["metadata"]["id"], "bp-1")
        self.assertEqual(printed["entity"]["name"], "python_buildpack")

    async def test_list_option_passed_as_filter_is_rejected(self):
        client = CloudFoundryClient(self.config, session=FakeSession())

        with self.assertRaises(ValueError):
            await main_module.run(self.parse("spaces", "--filter", "results_per_page=5"), client, self.console)

    async def test_job_requires_id(self):
        client = CloudFoundryClient(self.config, session=FakeSession())

        with self.assertRaises(ConfigError):
            await main_module.run(self.parse("jobs"), client, self.console)

    async def test_job_by_id(self):
        session = FakeSession(responses={
            "/v2/jobs/j1": [make_response(payload=resource_payload("j1", status="running"))]
        })
        client = CloudFoundryClient(self.config, session=session)

        await main_module.run(self.parse("jobs", "--get", "j1"), client, self.console)

        self.assertEqual(json.loads(self.output.getvalue())["status"], "running")


class TestMain(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.log_file = Path(self.tmp.name) / "cfpages.log"

    def test_configuration_problem_exit_code(self):
        with patch.object(main_module, "load_client_config", side_effect=ConfigError("no host")):
            code = main_module.main(["applications", "--log_file", str(self.log_file)])

        self.assertEqual(code, main_module.EXIT_CONFIG_ERROR)
        self.assertTrue(self.log_file.exists())


    def run_main(self, session, *argv):
        config = ClientConfig(api_host="https://api.example.com", token="t", retry_delay=0)
        with patch.object(main_module, "load_client_config", return_value=config), \
                patch.object(client_module.requests, "AsyncSession", return_value=session):
            return main_module.main(list(argv) + ["--log_file", str(self.log_file)])

    def test_api_error_exit_code(self):
        body = {"code": 10000, "description": "Unknown request", "error_code": "CF-NotFound"}
        session = FakeSession(responses={"/v2/apps/app-1": [make_response(status_code=404, payload=body)]})

        code = self.run_main(session, "applications", "--get", "app-1")

        self.assertEqual(code, main_module.EXIT_API_ERROR)
        session.close.assert_awaited_once()

    def test_list_option_filter_exit_code(self):
        session = FakeSession()

        code = self.run_main(session, "spaces", "--filter", "results_per_page=5")

        self.assertEqual(code, main_module.EXIT_CONFIG_ERROR)
        session.get.assert_not_called()


if __name__ == "__main__":
    unittest.main()
