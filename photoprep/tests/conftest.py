"""
Pytest fixtures for photoprep tests.
"""

import pytest


@pytest.fixture
def logger():
    """Fixture providing a logger."""
    import logging
    return logging.getLogger('test')


@pytest.fixture
def make_photo(tmp_path):
    """Fixture providing a factory that writes a solid-colour photo."""
    from PIL import Image

    def _make(relpath, size=(120, 80), color='red', mode='RGB', fmt=None):
        path = tmp_path / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        img = Image.new(mode, size, color=color)
        img.save(path, format=fmt)
        return str(path)

    return _make


@pytest.fixture
def source_dir(tmp_path, make_photo):
    """Fixture providing a source tree with two photos and some noise."""
    make_photo('src/Sunset Beach.jpg', size=(160, 90), color='orange')
    make_photo('src/trips/IMG_0042.PNG', size=(80, 120), color='green')
    (tmp_path / 'src' / 'notes.txt').write_text('not a photo')
    return str(tmp_path / 'src')


@pytest.fixture
def watermark_file(tmp_path):
    """Fixture providing an opaque blue 8x8 watermark."""
    from PIL import Image

    path = tmp_path / 'watermark.png'
    Image.new('RGBA', (8, 8), color=(0, 0, 255, 255)).save(path)
    return str(path)


@pytest.fixture
def config(tmp_path, watermark_file):
    """Fixture providing a configuration rooted in tmp_path."""
    from photoprep.config import ResizeConfig

    return ResizeConfig(
        root=str(tmp_path / 'out'),
        watermark_path=watermark_file,
        quality=90,
        placeholder_width=8,
    )


@pytest.fixture
def run_ids():
    """Fixture providing predictable run identities: run1, run2, ..."""
    counter = {'n': 0}

    def _next():
        counter['n'] += 1
        return f"run{counter['n']}"

    return _next


@pytest.fixture
def sample_manifest(tmp_path):
    """Fixture providing a manifest with two entries."""
    from photoprep.manifest import CategoryManifest, ManifestEntry

    manifest = CategoryManifest('blog', str(tmp_path / 'out' / 'blog.json'))
    manifest.set('sunset-beach-jpg', ManifestEntry(sha='a' * 40, id='run1'))
    manifest.set('img_0042-png', ManifestEntry(sha='b' * 40, id='run2'))
    return manifest


@pytest.fixture
def sample_index(tmp_path):
    """Fixture providing an index with entries for two categories."""
    from photoprep.manifest import CategoryIndex

    return CategoryIndex(
        str(tmp_path / 'out' / 'photos.json'),
        {
            'blog': ['out/photos/run1/blog/640/a-by-me.jpg', 'out/photos/run1/blog/sqip/a-by-me.svg'],
            'portfolio': ['out/photos/run9/portfolio/640/b-by-me.jpg'],
        },
    )


@pytest.fixture
def break_decoding(mocker):
    """
    Fixture providing a function that marks paths as undecodable.

    Image.open still succeeds for a marked path, but load() raises the
    SyntaxError Pillow uses for damaged PNG chunks.
    """
    from PIL import Image

    real_open = Image.open
    broken = set()

    def _open(fp, *args, **kwargs):
        if str(fp) in broken:
            img = mocker.MagicMock()
            img.__enter__.return_value = img
            img.load.side_effect = SyntaxError('broken PNG file')
            return img
        return real_open(fp, *args, **kwargs)

    mocker.patch.object(Image, 'open', side_effect=_open)
    return broken.add
