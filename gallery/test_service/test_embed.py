"""
Tests for service/embed.py
"""

from django.test import SimpleTestCase

from gallery.service.embed import (
    get_video_provider,
    get_vimeo_id,
    get_youtube_id,
    is_absolute_url,
    resolve_url,
    to_autoplay_embed_url,
    to_embed_url,
)

YOUTUBE_AUTOPLAY_QUERY = (
    'autoplay=1&mute=1&playsinline=1&loop=1&playlist=abc123&rel=0&modestbranding=1&controls=0'
)
VIMEO_AUTOPLAY_QUERY = 'autoplay=1&muted=1&loop=1&background=1&autopause=0'


class ResolveUrlTest(SimpleTestCase):
    """Tests for making API paths absolute"""

    def test_relative_path_gets_origin(self):
        self.assertEqual(
            resolve_url('/media/x.png', 'https://api.example.com'),
            'https://api.example.com/media/x.png',
        )

    def test_absolute_urls_unchanged(self):
        """Test http and https URLs pass through"""
        for url in ('http://cdn.example.com/a.png', 'https://cdn.example.com/a.png'):
            self.assertEqual(resolve_url(url, 'https://api.example.com'), url)

    def test_scheme_check_is_case_insensitive(self):
        self.assertEqual(resolve_url('HTTPS://CDN.example.com/a.png', 'x'), 'HTTPS://CDN.example.com/a.png')

    def test_empty_unchanged(self):
        self.assertEqual(resolve_url('', 'https://api.example.com'), '')
        self.assertIsNone(resolve_url(None, 'https://api.example.com'))

    def test_is_absolute_url(self):
        self.assertTrue(is_absolute_url('http://a'))
        self.assertFalse(is_absolute_url('/http://a'))
        self.assertFalse(is_absolute_url('ftp://a'))
        self.assertFalse(is_absolute_url(''))


class VideoIdTest(SimpleTestCase):
    """Tests for provider id extraction"""

    def test_youtube_short_link(self):
        self.assertEqual(get_youtube_id('https://youtu.be/abc123'), 'abc123')
        self.assertEqual(get_youtube_id('https://youtu.be/abc123?t=42'), 'abc123')

    def test_youtube_watch_link(self):
        self.assertEqual(get_youtube_id('https://www.youtube.com/watch?v=abc123&t=5'), 'abc123')

    def test_youtube_short_form_wins(self):
        """Test the path form is tried before the query parameter"""
        self.assertEqual(get_youtube_id('https://youtu.be/first?v=second'), 'first')

    def test_vimeo(self):
        self.assertEqual(get_vimeo_id('https://vimeo.com/123456'), '123456')
        self.assertIsNone(get_vimeo_id('https://vimeo.com/channels/staff'))

    def test_missing(self):
        self.assertIsNone(get_youtube_id(''))
        self.assertIsNone(get_vimeo_id(None))


class VideoProviderTest(SimpleTestCase):
    """Tests for deciding between iframe and native playback"""

    def test_youtube(self):
        self.assertEqual(get_video_provider('https://youtu.be/abc123'), 'youtube')
        self.assertEqual(get_video_provider('https://www.youtube.com/watch?v=abc123'), 'youtube')
        self.assertEqual(get_video_provider('https://www.youtube.com/embed/abc123'), 'youtube')

    def test_vimeo(self):
        self.assertEqual(get_video_provider('https://vimeo.com/123456'), 'vimeo')
        self.assertEqual(get_video_provider('https://player.vimeo.com/video/123456'), 'vimeo')

    def test_direct_file(self):
        self.assertIsNone(get_video_provider('/uploads/clip.mp4'))
        self.assertIsNone(get_video_provider(''))


class EmbedUrlTest(SimpleTestCase):
    """Tests for iframe embed conversion"""

    def test_youtube_forms(self):
        """Test share and watch links map to the same embed URL"""
        expected = 'https://www.youtube.com/embed/abc123'
        self.assertEqual(to_embed_url('https://youtu.be/abc123'), expected)
        self.assertEqual(to_embed_url('https://www.youtube.com/watch?v=abc123'), expected)
        self.assertEqual(to_embed_url('https://www.youtube.com/watch?v=abc123&t=5'), expected)

    def test_vimeo(self):
        self.assertEqual(to_embed_url('https://vimeo.com/123456'), 'https://player.vimeo.com/video/123456')

    def test_other_urls_unchanged(self):
        for url in ('/uploads/clip.mp4', 'https://cdn.example.com/a.mp4', '', 'not a url'):
            self.assertEqual(to_embed_url(url), url)

    def test_provider_link_without_id_unchanged(self):
        for url in ('https://youtu.be/', 'https://www.youtube.com/watch?v=', 'https://vimeo.com/about'):
            self.assertEqual(to_embed_url(url), url)

    def test_idempotent(self):
        """Test converting an embed URL again changes nothing"""
        inputs = [
            'https://youtu.be/abc123',
            'https://www.youtube.com/watch?v=abc123&t=5',
            'https://vimeo.com/123456',
            'https://www.youtube.com/embed/abc123',
            'https://player.vimeo.com/video/123456',
            '/uploads/clip.mp4',
            'https://youtu.be/',
            '',
        ]
        for url in inputs:
            once = to_embed_url(url)
            self.assertEqual(to_embed_url(once), once, url)


class AutoplayEmbedUrlTest(SimpleTestCase):
    """Tests for background autoplay URLs"""

    def test_youtube(self):
        self.assertEqual(
            to_autoplay_embed_url('https://youtu.be/abc123'),
            f'https://www.youtube.com/embed/abc123?{YOUTUBE_AUTOPLAY_QUERY}',
        )

    def test_youtube_embed_with_query(self):
        """Test parameters are joined with & when a query already exists"""
        self.assertEqual(
            to_autoplay_embed_url('https://www.youtube.com/embed/abc123?start=5'),
            f'https://www.youtube.com/embed/abc123?start=5&{YOUTUBE_AUTOPLAY_QUERY}',
        )

    def test_vimeo(self):
        self.assertEqual(
            to_autoplay_embed_url('https://vimeo.com/123456'),
            f'https://player.vimeo.com/video/123456?{VIMEO_AUTOPLAY_QUERY}',
        )

    def test_other_urls_unchanged(self):
        self.assertEqual(to_autoplay_embed_url('/uploads/clip.mp4'), '/uploads/clip.mp4')
        self.assertEqual(to_autoplay_embed_url(''), '')
