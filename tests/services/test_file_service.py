"""Tests for FileService."""

from sitekit.services.file import FileService


class TestMkdir:
    """Tests for FileService.mkdir."""

    def test_creates_directory(self, mock_repository):
        service = FileService(mock_repository)

        result = service.mkdir("/var/www/cache")

        assert result.success
        assert result.data == "/var/www/cache"
        assert mock_repository.is_dir("/var/www")

    def test_existing_directory(self, mock_repository):
        mock_repository.mkdir("/var/www")

        result = FileService(mock_repository).mkdir("/var/www")

        assert result.success
        assert "exists" in result.message

    def test_current_directory(self, mock_repository):
        assert FileService(mock_repository).mkdir("").data == "."
        assert FileService(mock_repository).mkdir(".").success

    def test_file_in_the_way(self, mock_repository):
        mock_repository.write_binary("/var/www/index.html", b"")

        result = FileService(mock_repository).mkdir("/var/www/index.html")

        assert not result.success
        assert "Not a directory" in result.error

    def test_os_error(self, mock_repository, mocker):
        mocker.patch.object(mock_repository, "mkdir", side_effect=PermissionError("denied"))

        result = FileService(mock_repository).mkdir("/root/cache")

        assert not result.success
        assert "denied" in result.error

    def test_exists(self, mock_repository):
        mock_repository.write_binary("/a.txt", b"x")

        assert FileService(mock_repository).exists("/a.txt")
        assert not FileService(mock_repository).exists("/b.txt")
