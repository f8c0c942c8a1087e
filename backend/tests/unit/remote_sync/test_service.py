"""Unit tests for RemoteSyncService.

Tests cover:
- Protocol selection from explicit protocol and port
- Credential defaults and validation
- One connection per call, released on every exit path
"""

import pytest

from hotfix.config import Settings
from hotfix.domain.remote import (
    FetchedFile,
    InputError,
    PublishAbort,
    RemoteConnectionError,
    RemoteOperationError,
    RemoteProtocol,
)
from hotfix.remote_sync.service import RemoteSyncService, select_protocol

SFTP_PORTS = [22, 8010]


class TestSelectProtocol:

    @pytest.mark.parametrize("port", [22, 8010])
    def test_sftp_ports(self, port):
        assert select_protocol(None, port, SFTP_PORTS) is RemoteProtocol.SFTP

    @pytest.mark.parametrize("port", [21, 2121, 0, None])
    def test_other_ports_are_ftp(self, port):
        assert select_protocol(None, port, SFTP_PORTS) is RemoteProtocol.FTP

    def test_explicit_protocol_wins_over_port(self):
        assert select_protocol("ftp", 22, SFTP_PORTS) is RemoteProtocol.FTP
        assert select_protocol("sftp", 2222, SFTP_PORTS) is RemoteProtocol.SFTP

    def test_explicit_protocol_is_case_insensitive(self):
        assert select_protocol(" SFTP ", None, SFTP_PORTS) is RemoteProtocol.SFTP

    def test_unknown_protocol_rejected(self):
        with pytest.raises(InputError, match="unsupported protocol"):
            select_protocol("ftps", 21, SFTP_PORTS)


class TestBuildCredentials:

    @pytest.fixture
    def service(self):
        return RemoteSyncService(Settings())

    def test_missing_host_rejected(self, service):
        with pytest.raises(InputError, match="host is required"):
            service.build_credentials(host="", port=21)

    def test_blank_host_rejected(self, service):
        with pytest.raises(InputError):
            service.build_credentials(host="   ")

    def test_ftp_defaults(self, service):
        credentials = service.build_credentials(host=" ftp.example.com ")

        assert credentials.host == "ftp.example.com"
        assert credentials.port == 21
        assert credentials.protocol is RemoteProtocol.FTP
        assert credentials.base_path == "/"
        assert credentials.username == ""
        assert credentials.password == ""

    def test_sftp_default_port(self, service):
        credentials = service.build_credentials(host="h", protocol="sftp")

        assert credentials.port == 22

    def test_sftp_inferred_from_port(self, service):
        credentials = service.build_credentials(host="h", port=8010, path="/var/www")

        assert credentials.protocol is RemoteProtocol.SFTP
        assert credentials.port == 8010
        assert credentials.base_path == "/var/www"

    def test_password_not_in_repr_or_description(self, service):
        credentials = service.build_credentials(host="h", username="web", password="hunter2")

        assert "hunter2" not in repr(credentials)
        assert "hunter2" not in str(credentials.describe())
        assert credentials.describe()["password"] == "(provided)"


class TestPrepareFiles:

    def test_empty_list_rejected(self, sync_service):
        with pytest.raises(InputError, match="files required"):
            sync_service.prepare_files([])

    def test_names_normalized(self, sync_service):
        prepared = sync_service.prepare_files([FetchedFile(name="/css//site.css", content="x")])

        assert prepared[0].name == "css/site.css"

    def test_unencodable_content_rejected(self, sync_service):
        files = [
            FetchedFile(name="a.css", content="\ud800"),
            FetchedFile(name="b.css", content="ok"),
        ]

        with pytest.raises(InputError, match="a.css"):
            sync_service.prepare_files(files)


class TestFetch:

    def test_one_connection_per_call(self, sync_service, remote_fs, remote_fs_factory):
        remote_fs.add_file("/site/index.html", "<html>")
        credentials = sync_service.build_credentials(host="h", path="/site")

        result = sync_service.fetch(credentials)

        assert [f.name for f in result.files] == ["site/index.html"]
        assert remote_fs.connect_calls == 1
        assert remote_fs.disconnect_calls == 1
        assert remote_fs_factory.calls[0]["timeout"] == 15.0
        assert remote_fs_factory.calls[0]["credentials"] is credentials

    def test_listing_failure_releases_connection(self, sync_service, remote_fs):
        credentials = sync_service.build_credentials(host="h", path="/missing")

        with pytest.raises(RemoteOperationError):
            sync_service.fetch(credentials)

        assert remote_fs.disconnect_calls == 1

    def test_connect_failure_propagates(self, sync_service, remote_fs):
        remote_fs.connect_error = RemoteConnectionError("Authentication failed: 530 Login incorrect")
        credentials = sync_service.build_credentials(host="h")

        with pytest.raises(RemoteConnectionError, match="530"):
            sync_service.fetch(credentials)

        assert remote_fs.disconnect_calls == 0

    def test_configured_extensions_used(self, remote_fs, remote_fs_factory):
        service = RemoteSyncService(Settings(FETCH_EXTENSIONS=["txt"]), remote_fs_factory=remote_fs_factory)
        remote_fs.add_file("/notes.txt", "n")
        remote_fs.add_file("/index.html", "i")

        result = service.fetch(service.build_credentials(host="h"))

        assert [f.name for f in result.files] == ["notes.txt"]


class TestPublish:

    def test_invalid_files_rejected_before_connecting(self, sync_service, remote_fs, remote_fs_factory):
        credentials = sync_service.build_credentials(host="h")

        with pytest.raises(InputError):
            sync_service.publish(credentials, [FetchedFile(name="../x.html", content="x")])

        assert remote_fs_factory.calls == []
        assert remote_fs.connect_calls == 0

    def test_publish_uses_publish_timeout(self, sync_service, remote_fs, remote_fs_factory):
        credentials = sync_service.build_credentials(host="h", path="/root")

        report = sync_service.publish(credentials, [FetchedFile(name="a/b/style.css", content="s")])

        assert report.ok
        assert remote_fs_factory.calls[0]["timeout"] == 20.0
        assert remote_fs.disconnect_calls == 1

    def test_fail_fast_setting(self, remote_fs, remote_fs_factory):
        service = RemoteSyncService(Settings(PUBLISH_FAIL_FAST=True), remote_fs_factory=remote_fs_factory)
        remote_fs.unwritable.add("/a.html")

        with pytest.raises(PublishAbort):
            service.publish(service.build_credentials(host="h"), [FetchedFile(name="a.html", content="a")])

        assert remote_fs.disconnect_calls == 1
