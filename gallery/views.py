from urllib.parse import urlencode

from django.contrib import messages
from django.shortcuts import redirect, render
from django.urls import reverse
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_http_methods, require_POST

from gallery.decorators import SESSION_TOKEN_KEY, api_token_required, get_session_token
from gallery.operations import (
    assign_media_group,
    bump_media_position,
    edit_contact_blocks,
    load_contact_for_edit,
    load_contact_thumbnails,
    load_gallery,
    load_home,
    move_category,
    safe_public_categories,
    safe_public_socials,
    save_social_link,
)
from gallery.service.api_client import ApiError, AuthenticationError, PortfolioApiClient
from gallery.service.constants import (
    BLOCK_IMAGE,
    BLOCK_TEXT,
    BLOCK_VIDEO,
    MEDIA_KINDS,
    SOCIAL_PLATFORMS,
)
from gallery.service.contact import (
    SECTION_IMAGES,
    SECTION_OTHERS,
    append_block,
    move_block,
    remove_block,
    split_blocks,
    update_text_block,
)
from gallery.service.ordering import default_group_key, media_stats

DIRECTIONS = {'up': -1, 'down': 1}


def _client(request):
    """API client carrying the signed-in admin's token, if any."""
    return PortfolioApiClient(token=get_session_token(request))


def _api_failed(request, message, error):
    """Report a failed admin action; auth failures go to api_token_required."""
    if isinstance(error, AuthenticationError):
        raise error
    messages.error(request, f'{message}: {error}')


def _int_or_none(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _panel_redirect(category_id=None, slide_key=None):
    url = reverse('admin_panel')
    params = {}
    if category_id:
        params['category'] = category_id
    if slide_key:
        params['slide'] = slide_key
    if params:
        url = f'{url}?{urlencode(params)}'
    return redirect(url)


# Public pages


def home_view(request):
    """Landing page with a background strip and links into the galleries."""
    client = PortfolioApiClient()
    try:
        home = load_home(client)
    except ApiError:
        home = {'categories': [], 'backgrounds': [], 'first_category_id': None}

    return render(
        request,
        'gallery/home.html',
        {**home, 'socials': safe_public_socials(client)},
    )


def category_view(request, category_id):
    """
    Category gallery: the slide carousel and the items of the active slide.

    Params:
        slide (optional): index of the active slide, default 0
    """
    client = PortfolioApiClient()
    nav_categories = safe_public_categories(client)

    try:
        category, gallery = load_gallery(client, category_id)
    except ApiError as e:
        return render(
            request,
            'gallery/category.html',
            {'error': 'Failed to load the category.', 'nav_categories': nav_categories},
            status=404 if e.status_code == 404 else 502,
        )

    slide_index = _int_or_none(request.GET.get('slide')) or 0
    if not 0 <= slide_index < len(gallery.slides):
        slide_index = 0
    active_slide = gallery.slides[slide_index] if gallery.slides else None

    return render(
        request,
        'gallery/category.html',
        {
            'category': category,
            'slides': gallery.slides,
            'slide_index': slide_index,
            'active_slide': active_slide,
            'subcontent': gallery.items_for(active_slide),
            'nav_categories': nav_categories,
        },
    )


@require_http_methods(['GET', 'POST'])
def contact_view(request):
    """
    Contact page with the message form.

    POST params:
        name, last_name, email, content (required)
        website: honeypot, must stay empty
    """
    client = PortfolioApiClient()
    form_values = {'name': '', 'last_name': '', 'email': '', 'content': ''}

    if request.method == 'POST':
        # Bots fill the hidden field; drop the message without telling them
        if request.POST.get('website', '').strip():
            return redirect('contact')

        form_values = {k: request.POST.get(k, '').strip() for k in form_values}
        if not all(form_values.values()):
            messages.error(request, 'Please fill in every field.')
        else:
            try:
                client.send_message(**form_values)
            except ApiError:
                messages.error(request, 'Failed to send your message.')
            else:
                messages.success(
                    request, 'Thank you! Your message was sent successfully.'
                )
                return redirect('contact')

    nav_categories = safe_public_categories(client)
    try:
        contact = client.public_contact()
    except ApiError:
        return render(
            request,
            'gallery/contact.html',
            {'error': 'Failed to load the contact page.', 'nav_categories': nav_categories},
            status=502,
        )

    _, other_blocks = split_blocks(contact.get('blocks'))
    return render(
        request,
        'gallery/contact.html',
        {
            'contact': contact,
            'blocks': other_blocks,
            'thumbnails': load_contact_thumbnails(client, contact),
            'socials': safe_public_socials(client),
            'form_values': form_values,
            'nav_categories': nav_categories,
        },
    )


# Admin: session


@require_http_methods(['GET', 'POST'])
def signin_view(request):
    """Exchange email and password for an API token kept in the session."""
    next_url = request.POST.get('next') or request.GET.get('next') or ''
    error = ''

    if request.method == 'POST':
        email = request.POST.get('email', '').strip()
        password = request.POST.get('password', '')
        try:
            token = PortfolioApiClient().login(email, password)
        except AuthenticationError:
            error = 'Invalid credentials'
        except ApiError:
            error = 'Could not reach the server, try again later'
        else:
            request.session.cycle_key()
            request.session[SESSION_TOKEN_KEY] = token
            if not url_has_allowed_host_and_scheme(next_url, allowed_hosts={request.get_host()}):
                next_url = reverse('admin_panel')
            return redirect(next_url)

    return render(
        request,
        'gallery/admin/signin.html',
        {'error': error, 'next': next_url},
        status=401 if error == 'Invalid credentials' else 200,
    )


@require_POST
def signout_view(request):
    request.session.flush()
    return redirect('signin')


# Admin: categories and media


@api_token_required
def admin_panel_view(request):
    """
    Admin panel index.

    Params:
        category (optional): id of the selected category
        slide (optional): grouping key of the active slide
    """
    client = _client(request)

    try:
        categories = client.list_categories()
    except ApiError as e:
        _api_failed(request, 'Could not load categories', e)
        categories = []

    context = {
        'categories': categories,
        'selected': None,
        'socials': safe_public_socials(client),
        'has_cv': client.has_cv(),
        'cv_url': client.cv_download_url,
        'social_platforms': SOCIAL_PLATFORMS,
        'media_kinds': MEDIA_KINDS,
    }

    selected_id = _int_or_none(request.GET.get('category'))
    selected = next((c for c in categories if c.get('id') == selected_id), None)
    if selected:
        try:
            detail, gallery = load_gallery(client, selected['id'])
        except ApiError as e:
            _api_failed(request, 'Could not load the category', e)
        else:
            slide_keys = [s.group_key for s in gallery.slides if s.group_key]
            active_key = request.GET.get('slide')
            if active_key not in slide_keys:
                active_key = default_group_key(gallery.slides)

            context.update(
                {
                    'selected': selected,
                    'detail': detail,
                    'slides': gallery.slides,
                    'slide_groups': [
                        {'slide': s, 'items': gallery.items_for(s)} for s in gallery.slides
                    ],
                    'ungrouped': [
                        m for m in gallery.items if not m.is_slide and not m.group_key
                    ],
                    'slide_keys': slide_keys,
                    'active_key': active_key,
                    'stats': media_stats(gallery.items, gallery.slides),
                }
            )

    return render(request, 'gallery/admin/panel.html', context)


@require_POST
@api_token_required
def category_create_view(request):
    name = request.POST.get('name', '').strip()
    description = request.POST.get('description', '').strip()
    if not name:
        messages.error(request, 'Category name is required.')
        return _panel_redirect()

    try:
        created = _client(request).create_category(name, description)
    except ApiError as e:
        _api_failed(request, 'Could not create the category', e)
        return _panel_redirect()

    messages.success(request, f'Category "{name}" created.')
    return _panel_redirect((created or {}).get('id'))


@require_POST
@api_token_required
def category_delete_view(request, category_id):
    try:
        _client(request).delete_category(category_id)
    except ApiError as e:
        _api_failed(request, 'Could not delete the category', e)
        return _panel_redirect(category_id)

    messages.success(request, 'Category deleted.')
    return _panel_redirect()


@require_POST
@api_token_required
def category_move_view(request, category_id):
    direction = DIRECTIONS.get(request.POST.get('direction'))
    if direction is None:
        messages.error(request, 'Unknown direction.')
        return _panel_redirect(category_id)

    client = _client(request)
    try:
        move_category(client, client.list_categories(), category_id, direction)
    except ApiError as e:
        _api_failed(request, 'Could not reorder categories', e)
    return _panel_redirect(category_id)


@require_POST
@api_token_required
def media_upload_view(request, category_id):
    """
    Upload a slide or an item into a category.

    POST params:
        file (required), type: image|video, role: slide|item
        slide_key: required for items, the group to join
        description (optional)
    """
    upload = request.FILES.get('file')
    kind = request.POST.get('type')
    is_slide = request.POST.get('role', 'slide') == 'slide'
    slide_key = request.POST.get('slide_key', '').strip()
    description = request.POST.get('description', '').strip()

    if not upload:
        messages.error(request, 'Choose a file to upload.')
        return _panel_redirect(category_id, slide_key)
    if kind not in MEDIA_KINDS:
        messages.error(request, 'Media type must be image or video.')
        return _panel_redirect(category_id, slide_key)
    if not is_slide and not slide_key:
        messages.error(request, 'Select a slide first.')
        return _panel_redirect(category_id)

    try:
        _client(request).upload_media(
            category_id,
            upload,
            kind,
            is_slide,
            slide_key=None if is_slide else slide_key,
            description=description or None,
        )
    except ApiError as e:
        _api_failed(request, 'Upload failed', e)
    else:
        messages.success(request, 'Slide added.' if is_slide else 'Item added.')
    return _panel_redirect(category_id, slide_key)


@require_POST
@api_token_required
def media_delete_view(request, media_id):
    category_id = _int_or_none(request.POST.get('category'))
    slide_key = request.POST.get('slide_key')
    try:
        _client(request).delete_media(media_id)
    except ApiError as e:
        _api_failed(request, 'Could not delete the media', e)
    return _panel_redirect(category_id, slide_key)


@require_POST
@api_token_required
def media_meta_view(request, media_id):
    """
    Edit one media record.

    POST params:
        action: description | group | up | down
        description: new caption (action=description)
        group_key: target group, empty to detach (action=group)
        position: current position (action=up/down)
    """
    category_id = _int_or_none(request.POST.get('category'))
    slide_key = request.POST.get('slide_key')
    action = request.POST.get('action')
    client = _client(request)

    try:
        if action == 'description':
            client.update_media_meta(media_id, description=request.POST.get('description', ''))
            messages.success(request, 'Description saved.')
        elif action == 'group':
            assign_media_group(client, media_id, request.POST.get('group_key', '').strip())
        elif action in DIRECTIONS:
            current = _int_or_none(request.POST.get('position')) or 0
            bump_media_position(client, media_id, current, DIRECTIONS[action])
        else:
            messages.error(request, 'Unknown action.')
    except ApiError as e:
        _api_failed(request, 'Could not update the media', e)
    return _panel_redirect(category_id, slide_key)


# Admin: socials and CV


@require_POST
@api_token_required
def socials_view(request):
    platform = request.POST.get('platform')
    if platform not in SOCIAL_PLATFORMS:
        messages.error(request, 'Unknown platform.')
        return _panel_redirect()

    try:
        cleaned = save_social_link(_client(request), platform, request.POST.get('url', ''))
    except ApiError as e:
        _api_failed(request, 'Could not save the link', e)
    else:
        messages.success(request, 'Saved.' if cleaned else 'Link removed.')
    return _panel_redirect()


@require_POST
@api_token_required
def cv_upload_view(request):
    upload = request.FILES.get('file')
    if not upload:
        messages.error(request, 'Choose a PDF.')
        return _panel_redirect()
    if not upload.name.lower().endswith('.pdf'):
        messages.error(request, 'The CV must be a .pdf file.')
        return _panel_redirect()

    try:
        _client(request).upload_cv(upload)
    except ApiError as e:
        _api_failed(request, 'Could not upload the CV', e)
    else:
        messages.success(request, 'CV uploaded.')
    return _panel_redirect()


@require_POST
@api_token_required
def cv_delete_view(request):
    try:
        _client(request).delete_cv()
    except ApiError as e:
        _api_failed(request, 'Could not delete the CV', e)
    else:
        messages.success(request, 'CV deleted.')
    return _panel_redirect()


# Admin: contact page


@require_http_methods(['GET', 'POST'])
@api_token_required
def admin_contact_view(request):
    """
    Edit the contact page texts.

    POST params:
        section: 'texts' (title, intro, body) or 'footer' (footer_note)
    """
    client = _client(request)

    if request.method == 'POST':
        section = request.POST.get('section')
        if section == 'texts':
            fields = {k: request.POST.get(k, '') for k in ('title', 'intro', 'body')}
        elif section == 'footer':
            fields = {'footer_note': request.POST.get('footer_note', '')}
        else:
            messages.error(request, 'Unknown section.')
            return redirect('admin_contact')

        try:
            client.save_contact(**fields)
        except ApiError as e:
            _api_failed(request, 'Could not save', e)
        else:
            messages.success(request, 'Texts saved.' if section == 'texts' else 'Footer saved.')
        return redirect('admin_contact')

    try:
        contact = load_contact_for_edit(client)
    except ApiError as e:
        _api_failed(request, 'Could not load the contact page', e)
        contact = None

    context = {'contact': contact}
    if contact is not None:
        image_blocks, other_blocks = split_blocks(contact['blocks'])
        context.update({'image_blocks': image_blocks, 'other_blocks': other_blocks})
    return render(request, 'gallery/admin/contact.html', context)


@require_POST
@api_token_required
def contact_blocks_view(request):
    """
    Edit the contact blocks; every action is stored immediately.

    POST params:
        action: add_text | add_video_url | upload_image | upload_video |
                move | remove | save_text
        section, index, direction: for move/remove ('images' or 'others')
        content: for add_text/save_text
        url: for add_video_url
        file: for upload_image/upload_video
    """
    client = _client(request)
    action = request.POST.get('action')
    section = request.POST.get('section')
    index = _int_or_none(request.POST.get('index'))

    try:
        if action == 'add_text':
            block = {'type': BLOCK_TEXT, 'content': request.POST.get('content', '')}
            edit_contact_blocks(client, lambda blocks: append_block(blocks, block))
        elif action == 'add_video_url':
            url = request.POST.get('url', '').strip()
            if not url:
                messages.error(request, 'Enter a video URL.')
                return redirect('admin_contact')
            block = {'type': BLOCK_VIDEO, 'url': url}
            edit_contact_blocks(client, lambda blocks: append_block(blocks, block))
        elif action in ('upload_image', 'upload_video'):
            upload = request.FILES.get('file')
            if not upload:
                messages.error(request, 'Choose a file to upload.')
                return redirect('admin_contact')
            if action == 'upload_image':
                block = {'type': BLOCK_IMAGE, 'url': client.upload_contact_image(upload)}
            else:
                block = {'type': BLOCK_VIDEO, 'url': client.upload_contact_video(upload)}
            edit_contact_blocks(client, lambda blocks: append_block(blocks, block))
        elif action == 'move' and section in (SECTION_IMAGES, SECTION_OTHERS) and index is not None:
            direction = DIRECTIONS.get(request.POST.get('direction'), 0)
            edit_contact_blocks(
                client, lambda blocks: move_block(blocks, section, index, direction)
            )
        elif action == 'remove' and section in (SECTION_IMAGES, SECTION_OTHERS) and index is not None:
            edit_contact_blocks(client, lambda blocks: remove_block(blocks, section, index))
        elif action == 'save_text' and index is not None:
            content = request.POST.get('content', '')
            edit_contact_blocks(client, lambda blocks: update_text_block(blocks, index, content))
        else:
            messages.error(request, 'Unknown action.')
            return redirect('admin_contact')
    except ApiError as e:
        _api_failed(request, 'Could not save blocks', e)
    else:
        messages.success(request, 'Blocks saved.')
    return redirect('admin_contact')
