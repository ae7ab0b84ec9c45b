"""
Tests for the public pages (home, category gallery, contact).

The portfolio API client is replaced by a mock; every view builds its client
through gallery.views.PortfolioApiClient.
"""

from unittest.mock import patch

from django.contrib.messages import get_messages
from django.test import SimpleTestCase, override_settings
from django.urls import reverse

from gallery.service.api_client import ApiError


@override_settings(PORTFOLIO_API_ORIGIN='https://api.example.com')
class PublicViewTestCase(SimpleTestCase):
    def setUp(self):
        patcher = patch('gallery.views.PortfolioApiClient')
        self.api_class = patcher.start()
        self.addCleanup(patcher.stop)
        self.api = self.api_class.return_value
        self.api.public_categories.return_value = [
            {'id': 3, 'name': 'Environments'},
            {'id': 4, 'name': 'Characters'},
        ]
        self.api.public_socials.return_value = {
            'linkedin': {'url': 'https://linkedin.com/in/someone'},
        }


class HomeViewTest(PublicViewTestCase):
    """Test the landing page"""

    def test_home_loads(self):
        """Test backgrounds and entry link come from the first category"""
        self.api.category_detail.side_effect = lambda cid: {
            'id': cid,
            'images': [{'id': cid, 'image_url': f'/media/{cid}.png'}],
        }

        response = self.client.get(reverse('home'))

        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, 'gallery/home.html')
        self.assertEqual(response.context['backgrounds'], [
            'https://api.example.com/media/3.png',
            'https://api.example.com/media/4.png',
        ])
        self.assertEqual(response.context['first_category_id'], 3)
        self.assertContains(response, reverse('category', args=[3]))
        self.assertContains(response, 'https://linkedin.com/in/someone')

    def test_home_when_api_is_down(self):
        """Test the page still renders without content"""
        self.api.public_categories.side_effect = ApiError('down')
        self.api.public_socials.side_effect = ApiError('down')

        response = self.client.get(reverse('home'))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context['backgrounds'], [])
        self.assertIsNone(response.context['first_category_id'])
        self.assertNotContains(response, 'Enter')


class CategoryViewTest(PublicViewTestCase):
    """Test the category gallery page"""

    def setUp(self):
        super().setUp()
        self.api.category_detail.return_value = {
            'id': 3,
            'name': 'Environments',
            'description': 'Worlds and places',
            'images': [
                {'id': 1, 'image_url': '/media/1.png', 'position': 0, 'is_carousel': True, 'slide_key': 'forest'},
                {'id': 2, 'image_url': '/media/2.png', 'position': 0, 'slide_key': 'forest', 'description': 'Sketch'},
                {'id': 3, 'image_url': '/media/3.png', 'position': 1, 'slide_key': 'forest'},
            ],
            'videos': [
                {'id': 4, 'video_url': 'https://youtu.be/abc123', 'position': 1, 'is_carousel': True},
            ],
        }

    def test_category_loads(self):
        """Test slides and the items of the first slide"""
        response = self.client.get(reverse('category', args=[3]))

        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, 'gallery/category.html')
        self.assertEqual([(m.kind, m.id) for m in response.context['slides']], [('image', 1), ('video', 4)])
        self.assertEqual(response.context['slide_index'], 0)
        self.assertEqual([m.id for m in response.context['subcontent']], [2, 3])
        self.assertContains(response, 'https://api.example.com/media/1.png')
        self.assertContains(response, 'https://www.youtube.com/embed/abc123?autoplay=1')
        self.assertContains(response, 'Sketch')
        self.assertContains(response, 'Characters')

    def test_select_slide(self):
        """Test ?slide selects the active slide and its items"""
        response = self.client.get(reverse('category', args=[3]), {'slide': 1})

        self.assertEqual(response.context['slide_index'], 1)
        self.assertEqual(response.context['active_slide'].id, 4)
        self.assertEqual(response.context['subcontent'], [])

    def test_invalid_slide_index_falls_back(self):
        for value in ('9', '-1', 'abc'):
            response = self.client.get(reverse('category', args=[3]), {'slide': value})
            self.assertEqual(response.context['slide_index'], 0)

    def test_fallback_slides(self):
        """Test a category without flagged slides shows every item as a slide"""
        self.api.category_detail.return_value = {
            'id': 3,
            'images': [{'id': 1, 'image_url': '/a.png'}, {'id': 2, 'image_url': '/b.png', 'slide_key': 'x'}],
            'videos': [],
        }
        response = self.client.get(reverse('category', args=[3]))
        self.assertEqual([m.id for m in response.context['slides']], [1, 2])

    def test_empty_category(self):
        self.api.category_detail.return_value = {'id': 3, 'images': [], 'videos': []}
        response = self.client.get(reverse('category', args=[3]))
        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.context['active_slide'])
        self.assertContains(response, 'does not have any content yet')

    def test_missing_category(self):
        self.api.category_detail.side_effect = ApiError('Not found', 404)
        response = self.client.get(reverse('category', args=[99]))
        self.assertEqual(response.status_code, 404)
        self.assertContains(response, 'Failed to load the category.', status_code=404)

    def test_api_down(self):
        self.api.category_detail.side_effect = ApiError('not reachable')
        response = self.client.get(reverse('category', args=[3]))
        self.assertEqual(response.status_code, 502)


class ContactViewTest(PublicViewTestCase):
    """Test the contact page and its message form"""

    def setUp(self):
        super().setUp()
        self.api.public_contact.return_value = {
            'title': 'Say hello',
            'intro': 'Open for commissions',
            'footer_note': 'Replies within a week',
            'blocks': [
                {'type': 'image', 'url': '/media/strip.png', 'position': 0},
                {'type': 'text', 'content': 'Based in Lisbon', 'position': 1},
                {'type': 'video', 'url': 'https://vimeo.com/42', 'position': 2},
            ],
        }
        self.form = {
            'name': 'Ada',
            'last_name': 'Lovelace',
            'email': 'ada@example.com',
            'content': 'Hello there',
        }

    def test_contact_loads(self):
        response = self.client.get(reverse('contact'))

        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, 'gallery/contact.html')
        self.assertEqual(response.context['thumbnails'], ['https://api.example.com/media/strip.png'])
        self.assertEqual([b['type'] for b in response.context['blocks']], ['text', 'video'])
        self.assertContains(response, 'Say hello')
        self.assertContains(response, 'Based in Lisbon')
        self.assertContains(response, 'https://player.vimeo.com/video/42')

    def test_send_message(self):
        response = self.client.post(reverse('contact'), self.form)

        self.assertRedirects(response, reverse('contact'), fetch_redirect_response=False)
        self.api.send_message.assert_called_once_with(**self.form)
        messages = [str(m) for m in get_messages(response.wsgi_request)]
        self.assertIn('Thank you! Your message was sent successfully.', messages)

    def test_missing_fields(self):
        response = self.client.post(reverse('contact'), dict(self.form, email='  '))

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Please fill in every field.')
        self.assertContains(response, 'value="Ada"')
        self.api.send_message.assert_not_called()

    def test_honeypot_drops_message(self):
        """Test a filled hidden field silently skips sending"""
        response = self.client.post(reverse('contact'), dict(self.form, website='http://spam.example'))

        self.assertRedirects(response, reverse('contact'), fetch_redirect_response=False)
        self.api.send_message.assert_not_called()
        self.assertEqual(list(get_messages(response.wsgi_request)), [])

    def test_send_failure(self):
        self.api.send_message.side_effect = ApiError('down')
        response = self.client.post(reverse('contact'), self.form)

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Failed to send your message.')

    def test_contact_unavailable(self):
        self.api.public_contact.side_effect = ApiError('down')
        response = self.client.get(reverse('contact'))
        self.assertContains(response, 'Failed to load the contact page.', status_code=502)
