"""빌드/패키징 테스트"""

import zipfile
from unittest.mock import MagicMock, patch

import pytest

from plugin_release.core.exceptions import BuildError, ErrorCode, PackError
from plugin_release.infra.build.builder import (
    YarnWorkspaceBuilder,
    build_and_zip,
    detect_package_manager,
    run_command,
    zip_dist_folder,
)


@pytest.fixture
def dist_dir(plugin_dir):
    """빌드 결과가 있는 dist 디렉토리"""
    dist = plugin_dir / "dist"
    (dist / "assets").mkdir(parents=True)
    (dist / "index.html").write_text("<html></html>", encoding="utf-8")
    (dist / "assets" / "app.js").write_text("console.log(1)", encoding="utf-8")
    return dist


class TestDetectPackageManager:
    """detect_package_manager 함수 테스트"""

    @pytest.mark.parametrize(
        "lock_file,expected",
        [
            ("yarn.lock", "yarn"),
            ("pnpm-lock.yaml", "pnpm"),
            ("bun.lockb", "bun"),
            ("bun.lock", "bun"),
            ("package-lock.json", "npm"),
        ],
    )
    def test_lock_in_cwd(self, tmp_path, lock_file, expected):
        """현재 디렉토리 lock 파일"""
        (tmp_path / lock_file).touch()

        assert detect_package_manager(tmp_path) == expected

    def test_lock_in_parent(self, plugin_dir, tmp_path):
        """상위 디렉토리 lock 파일"""
        (tmp_path / "yarn.lock").touch()

        assert detect_package_manager(plugin_dir) == "yarn"

    def test_too_far_up(self, tmp_path):
        """세 단계 위는 탐색하지 않음"""
        deep = tmp_path / "a" / "b" / "c"
        deep.mkdir(parents=True)
        (tmp_path / "pnpm-lock.yaml").touch()

        assert detect_package_manager(deep) == "npm"

    def test_default_npm(self, tmp_path):
        """lock 파일이 없으면 npm"""
        assert detect_package_manager(tmp_path) == "npm"


class TestZipDistFolder:
    """zip_dist_folder 함수 테스트"""

    def test_zip_contents_relative_to_dist(self, plugin_dir, dist_dir):
        """dist 기준 상대 경로로 압축"""
        zip_path = zip_dist_folder(plugin_dir)

        assert zip_path == str(plugin_dir / "plugin.zip")
        with zipfile.ZipFile(zip_path) as archive:
            assert sorted(archive.namelist()) == ["assets/app.js", "index.html"]

    def test_missing_dist(self, plugin_dir):
        """dist가 없으면 PackError"""
        with pytest.raises(PackError) as exc_info:
            zip_dist_folder(plugin_dir)

        assert exc_info.value.error_code == ErrorCode.PACK_FAILED
        assert "build the Plugin first" in str(exc_info.value)


class TestRunCommand:
    """run_command 함수 테스트"""

    def test_success(self, tmp_path):
        """정상 종료"""
        with patch("plugin_release.infra.build.builder.subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0)
            run_command(["yarn", "build"], tmp_path)

        mock_run.assert_called_once_with(["yarn", "build"], cwd=tmp_path, check=False)

    def test_nonzero_exit(self, tmp_path):
        """0이 아닌 종료 코드"""
        with patch("plugin_release.infra.build.builder.subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=2)
            with pytest.raises(BuildError, match="exited with code 2"):
                run_command(["yarn", "build"], tmp_path)

    def test_missing_binary(self, tmp_path):
        """실행 파일 없음"""
        with patch("plugin_release.infra.build.builder.subprocess.run") as mock_run:
            mock_run.side_effect = FileNotFoundError("yarn")
            with pytest.raises(BuildError, match="Failed to start"):
                run_command(["yarn", "build"], tmp_path)


class TestBuildAndZip:
    """build_and_zip 함수 테스트"""

    def test_build_then_zip(self, plugin_dir, dist_dir, tmp_path):
        """감지된 매니저로 빌드 후 압축"""
        (tmp_path / "yarn.lock").touch()

        with patch("plugin_release.infra.build.builder.run_command") as mock_command:
            zip_path = build_and_zip(plugin_dir)

        mock_command.assert_called_once_with(["yarn", "run", "build"], plugin_dir)
        assert zipfile.is_zipfile(zip_path)

    def test_skip_build(self, plugin_dir, dist_dir):
        """빌드 생략"""
        with patch("plugin_release.infra.build.builder.run_command") as mock_command:
            build_and_zip(plugin_dir, skip_build=True)

        mock_command.assert_not_called()


class TestYarnWorkspaceBuilder:
    """YarnWorkspaceBuilder 테스트"""

    def test_build_runs_workspace_script(self, sample_plugin_info, tmp_path):
        """yarn workspace 빌드"""
        with patch("plugin_release.infra.build.builder.run_command") as mock_command:
            YarnWorkspaceBuilder(tmp_path).build(sample_plugin_info)

        mock_command.assert_called_once_with(
            ["yarn", "workspace", "@plugins/my-plugin", "build"], tmp_path
        )

    def test_pack_writes_plugin_zip(self, sample_plugin_info, dist_dir, tmp_path):
        """플러그인 zip 경로에 압축"""
        zip_path = YarnWorkspaceBuilder(tmp_path).pack(sample_plugin_info)

        assert zip_path == sample_plugin_info.zip_path
        assert zipfile.is_zipfile(zip_path)
