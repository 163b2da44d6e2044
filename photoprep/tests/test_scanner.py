"""Tests for PhotoScanner class."""

import os

import pytest
from photoprep.scanner import PhotoScanner


class TestPhotoScanner:
    """Tests for PhotoScanner class."""

    def test_extension_filtering(self, tmp_path, make_photo, logger):
        """Only recognized image extensions are returned."""
        make_photo('dir/photo.jpg')
        make_photo('dir/photo.gif')
        (tmp_path / 'dir' / 'notes.txt').write_text('hello')

        photos = PhotoScanner(logger).scan(str(tmp_path / 'dir'))

        assert photos == [str(tmp_path / 'dir' / 'photo.jpg')]

    def test_scan_is_recursive_and_case_insensitive(self, source_dir, logger):
        photos = PhotoScanner(logger).scan(source_dir)

        names = sorted(os.path.basename(p) for p in photos)
        assert names == ['IMG_0042.PNG', 'Sunset Beach.jpg']

    def test_scan_never_returns_directories(self, tmp_path, make_photo, logger):
        (tmp_path / 'dir' / 'album.jpg').mkdir(parents=True)
        make_photo('dir/album.jpg/inside.jpeg')

        photos = PhotoScanner(logger).scan(str(tmp_path / 'dir'))

        assert photos == [str(tmp_path / 'dir' / 'album.jpg' / 'inside.jpeg')]

    def test_scan_missing_root_returns_empty(self, tmp_path, logger, caplog):
        """A missing root is logged rather than raised."""
        photos = PhotoScanner(logger).scan(str(tmp_path / 'nope'))

        assert photos == []
        assert 'Cannot scan' in caplog.text

    def test_scan_unreadable_subdirectory_is_logged(self, tmp_path, make_photo, logger,
                                                    caplog, mocker):
        """A subdirectory that cannot be listed is logged; its siblings are still found."""
        make_photo('dir/locked/hidden.jpg')
        visible = make_photo('dir/open/visible.jpg')
        locked = str(tmp_path / 'dir' / 'locked')
        real_scandir = os.scandir

        def _scandir(path='.'):
            if os.fspath(path) == locked:
                raise PermissionError(13, 'Permission denied', locked)
            return real_scandir(path)

        mocker.patch('os.scandir', side_effect=_scandir)

        photos = PhotoScanner(logger).scan(str(tmp_path / 'dir'))

        assert photos == [visible]
        assert f'Cannot scan {locked}: Permission denied' in caplog.text

    @pytest.mark.skipif(hasattr(os, 'geteuid') and os.geteuid() == 0,
                        reason='root can list any directory')
    def test_scan_directory_without_permissions(self, tmp_path, make_photo, logger, caplog):
        make_photo('dir/locked/hidden.jpg')
        visible = make_photo('dir/open/visible.jpg')
        locked = tmp_path / 'dir' / 'locked'
        os.chmod(locked, 0)
        try:
            photos = PhotoScanner(logger).scan(str(tmp_path / 'dir'))
        finally:
            os.chmod(locked, 0o755)

        assert photos == [visible]
        assert 'Cannot scan' in caplog.text

    @pytest.mark.parametrize('filename, expected', [
        ('a.jpg', True),
        ('a.JPEG', True),
        ('a.Png', True),
        ('a.gif', False),
        ('a', False),
    ])
    def test_is_photo(self, filename, expected):
        assert PhotoScanner.is_photo(filename) is expected

    def test_list_dirs(self, source_dir, logger):
        dirs = PhotoScanner(logger).list_dirs(source_dir)

        assert dirs == [source_dir, os.path.join(source_dir, 'trips')]

    def test_list_dirs_missing_root(self, tmp_path, logger):
        assert PhotoScanner(logger).list_dirs(str(tmp_path / 'nope')) == []
