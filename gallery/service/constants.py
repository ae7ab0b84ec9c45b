"""
Media and provider constants.

Centralized definitions of media kinds, video providers and embed URL forms.
"""

# Media kinds as tagged by the ordering engine
KIND_IMAGE = 'image'
KIND_VIDEO = 'video'
MEDIA_KINDS = [KIND_IMAGE, KIND_VIDEO]

# Record field holding the URL for each kind
URL_FIELDS = {
    KIND_IMAGE: 'image_url',
    KIND_VIDEO: 'video_url',
}

# Video providers rendered through an iframe
PROVIDER_YOUTUBE = 'youtube'
PROVIDER_VIMEO = 'vimeo'

YOUTUBE_EMBED_BASE = 'https://www.youtube.com/embed/'
VIMEO_EMBED_BASE = 'https://player.vimeo.com/video/'

# Query parameters for muted, looping background playback
YOUTUBE_AUTOPLAY_PARAMS = [
    ('autoplay', '1'),
    ('mute', '1'),
    ('playsinline', '1'),
    ('loop', '1'),
    ('playlist', None),  # filled with the video id
    ('rel', '0'),
    ('modestbranding', '1'),
    ('controls', '0'),
]

VIMEO_AUTOPLAY_PARAMS = [
    ('autoplay', '1'),
    ('muted', '1'),
    ('loop', '1'),
    ('background', '1'),
    ('autopause', '0'),
]

# Social platforms the site links to
SOCIAL_PLATFORMS = ('linkedin', 'artstation')

# Contact block types
BLOCK_TEXT = 'text'
BLOCK_IMAGE = 'image'
BLOCK_VIDEO = 'video'
