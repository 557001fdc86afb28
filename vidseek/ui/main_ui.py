"""
Main UI creation and layout for VidSeek.
"""

import tkinter as tk
from tkinter import ttk
from typing import TYPE_CHECKING

from ..models import Phase
from ..utils import format_score, format_time, format_time_range

if TYPE_CHECKING:
    from ..core.vidseek_app import VidSeek

COLORS = {
    'bg': '#1e1e1e',
    'fg': '#e0e0e0',
    'frame_bg': '#252525',
    'entry_bg': '#2d2d2d',
    'button_bg': '#0078d4',
    'button_hover': '#106ebe',
    'button_active': '#005a9e',
    'button_disabled': '#404040',
    'accent': '#00bcf2',
    'border': '#3d3d3d',
    'text_secondary': '#a0a0a0',
    'success': '#4caf50',
    'error': '#f44336',
}

FONT_FAMILY = "Segoe UI"
FONT_NORMAL = (FONT_FAMILY, 10)
FONT_BOLD = (FONT_FAMILY, 10, "bold")
FONT_SMALL = (FONT_FAMILY, 9)
FONT_TITLE = (FONT_FAMILY, 16, "bold")


def configure_dark_theme(root: tk.Tk):
    """Configure the dark theme used across the window."""
    style = ttk.Style()
    if 'clam' in style.theme_names():
        style.theme_use('clam')

    root.configure(bg=COLORS['bg'])

    style.configure('TFrame', background=COLORS['bg'], borderwidth=0)
    style.configure('TLabelframe', background=COLORS['frame_bg'], foreground=COLORS['fg'],
                    borderwidth=1, relief='flat', bordercolor=COLORS['border'])
    style.configure('TLabelframe.Label', background=COLORS['frame_bg'], foreground=COLORS['fg'],
                    font=FONT_BOLD)
    style.configure('Card.TFrame', background=COLORS['frame_bg'])

    style.configure('TLabel', background=COLORS['bg'], foreground=COLORS['fg'], font=FONT_NORMAL)
    style.configure('Card.TLabel', background=COLORS['frame_bg'], foreground=COLORS['fg'])
    style.configure('Badge.TLabel', background=COLORS['frame_bg'], foreground=COLORS['accent'],
                    font=FONT_BOLD)
    style.configure('Score.TLabel', background=COLORS['frame_bg'],
                    foreground=COLORS['text_secondary'], font=FONT_SMALL)
    style.configure('Success.TLabel', background=COLORS['frame_bg'], foreground=COLORS['success'])
    style.configure('Error.TLabel', background=COLORS['frame_bg'], foreground=COLORS['error'])
    style.configure('Title.TLabel', font=FONT_TITLE)

    button_map = dict(
        background=[('active', COLORS['button_hover']),
                    ('pressed', COLORS['button_active']),
                    ('disabled', COLORS['button_disabled'])],
        foreground=[('disabled', COLORS['text_secondary'])]
    )
    style.configure('TButton', background=COLORS['button_bg'], foreground='white',
                    borderwidth=0, focuscolor='none', padding=(15, 8), font=FONT_NORMAL,
                    relief='flat')
    style.map('TButton', **button_map)
    style.configure('Primary.TButton', background=COLORS['button_bg'], foreground='white',
                    borderwidth=0, focuscolor='none', padding=(20, 10), font=FONT_BOLD,
                    relief='flat')
    style.map('Primary.TButton', **button_map)

    style.configure('TEntry', fieldbackground=COLORS['entry_bg'], foreground='white',
                    borderwidth=1, relief='flat', bordercolor=COLORS['border'], padding=8)
    style.map('TEntry', bordercolor=[('focus', COLORS['accent'])])


def create_main_ui(app: 'VidSeek'):
    """Create the main Tkinter window: loading gate plus the hidden main content."""
    app.root = tk.Tk()
    app.root.title("VidSeek - Video Semantic Search")
    app.root.geometry("1400x900")
    configure_dark_theme(app.root)

    app.root.columnconfigure(0, weight=1)
    app.root.rowconfigure(1, weight=1)

    header = ttk.Frame(app.root, padding="15")
    header.grid(row=0, column=0, sticky=(tk.W, tk.E))
    ttk.Label(header, text="Video Semantic Search", style='Title.TLabel').pack(anchor=tk.W)
    ttk.Label(header, text="Upload a video, and search for specific content using natural language!",
              foreground=COLORS['text_secondary']).pack(anchor=tk.W)

    # Loading gate - shown until the backend answers its first health probe
    app.loading_frame = ttk.Frame(app.root, padding="40")
    app.loading_frame.grid(row=1, column=0, sticky=(tk.W, tk.E, tk.N, tk.S))
    ttk.Label(app.loading_frame, text="Loading...", font=FONT_BOLD).pack(expand=True)

    app.content_frame = ttk.Frame(app.root, padding="10")
    main_paned = ttk.PanedWindow(app.content_frame, orient=tk.HORIZONTAL)
    main_paned.pack(fill=tk.BOTH, expand=True)
    left_frame = ttk.Frame(main_paned, padding="5")
    right_frame = ttk.Frame(main_paned, padding="5")
    main_paned.add(left_frame, weight=3)
    main_paned.add(right_frame, weight=2)
    left_frame.columnconfigure(0, weight=1)
    right_frame.columnconfigure(0, weight=1)
    right_frame.rowconfigure(1, weight=1)

    _create_upload_section(app, left_frame)
    _create_video_section(app, left_frame)
    _create_search_section(app, right_frame)
    _create_results_section(app, right_frame)
    _create_summary_section(app, right_frame)

    app.status_label = ttk.Label(app.root, text="Connecting to backend...",
                                 foreground=COLORS['text_secondary'], font=FONT_SMALL)
    app.status_label.grid(row=2, column=0, sticky=tk.W, padx=15, pady=5)


def _create_upload_section(app: 'VidSeek', parent):
    upload_frame = ttk.LabelFrame(parent, text="Upload Video", padding="15")
    upload_frame.grid(row=0, column=0, sticky=(tk.W, tk.E), pady=(0, 10))
    upload_frame.columnconfigure(1, weight=1)

    app.choose_btn = ttk.Button(upload_frame, text="Choose Video...", command=app._on_choose_file)
    app.choose_btn.grid(row=0, column=0, padx=5, pady=5, sticky=tk.W)

    app.file_label = ttk.Label(upload_frame, text="No file selected", style='Card.TLabel')
    app.file_label.grid(row=0, column=1, padx=5, pady=5, sticky=tk.W)

    app.upload_btn = ttk.Button(upload_frame, text="Upload & Process Video",
                                command=app._on_upload, style='Primary.TButton', state=tk.DISABLED)
    app.upload_btn.grid(row=0, column=2, padx=5, pady=5, sticky=tk.E)

    app.upload_status_label = ttk.Label(upload_frame, text="", style='Card.TLabel', wraplength=700)
    app.upload_status_label.grid(row=1, column=0, columnspan=3, padx=5, pady=(10, 0), sticky=tk.W)

    app.download_btn = ttk.Button(upload_frame, text="Download SRT Subtitle",
                                  command=app._on_download_subtitles)
    app.download_btn.grid(row=2, column=0, columnspan=3, padx=5, pady=(10, 0), sticky=tk.W)
    app.download_btn.grid_remove()


def _create_video_section(app: 'VidSeek', parent):
    app.video_frame = ttk.LabelFrame(parent, text="Video Player", padding="10")
    app.video_frame.grid(row=1, column=0, sticky=(tk.W, tk.E, tk.N, tk.S), pady=(0, 10))
    app.video_frame.columnconfigure(0, weight=1)

    app.video_canvas = tk.Canvas(app.video_frame, bg="#000000", height=400,
                                 highlightthickness=0, relief='flat')
    app.video_canvas.grid(row=0, column=0, sticky=(tk.W, tk.E, tk.N, tk.S))

    controls = ttk.Frame(app.video_frame)
    controls.grid(row=1, column=0, pady=(10, 0))
    app.play_btn = ttk.Button(controls, text="Play", command=app._on_play)
    app.play_btn.pack(side=tk.LEFT, padx=5)
    app.pause_btn = ttk.Button(controls, text="Pause", command=app._on_pause)
    app.pause_btn.pack(side=tk.LEFT, padx=5)

    app.video_frame.grid_remove()


def _create_search_section(app: 'VidSeek', parent):
    app.search_frame = ttk.LabelFrame(parent, text="Search Video Content", padding="15")
    app.search_frame.grid(row=0, column=0, sticky=(tk.W, tk.E), pady=(0, 10))
    app.search_frame.columnconfigure(0, weight=1)

    app.search_var = tk.StringVar()
    app.search_var.trace_add("write", lambda *_: app._on_query_changed())
    app.search_entry = ttk.Entry(app.search_frame, textvariable=app.search_var)
    app.search_entry.grid(row=0, column=0, sticky=(tk.W, tk.E), padx=(0, 5))
    app.search_entry.bind("<Return>", lambda event: app._on_search())

    app.search_btn = ttk.Button(app.search_frame, text="Search", command=app._on_search)
    app.search_btn.grid(row=0, column=1, sticky=tk.E)

    ttk.Label(app.search_frame, text="e.g. 'introduction', 'main points', 'conclusion'",
              style='Card.TLabel', foreground=COLORS['text_secondary'],
              font=FONT_SMALL).grid(row=1, column=0, columnspan=2, sticky=tk.W, pady=(5, 0))

    app.search_frame.grid_remove()


def _create_results_section(app: 'VidSeek', parent):
    app.results_frame = ttk.LabelFrame(parent, text="Search Results", padding="10")
    app.results_frame.grid(row=1, column=0, sticky=(tk.W, tk.E, tk.N, tk.S), pady=(0, 10))
    app.results_frame.columnconfigure(0, weight=1)
    app.results_frame.grid_remove()


def _create_summary_section(app: 'VidSeek', parent):
    app.summary_frame = ttk.LabelFrame(parent, text="Transcript Summary", padding="10")
    app.summary_frame.grid(row=2, column=0, sticky=(tk.W, tk.E), pady=(0, 10))
    app.summary_frame.columnconfigure(0, weight=1)

    app.summary_text = tk.Text(app.summary_frame, wrap=tk.WORD, height=8, state=tk.DISABLED,
                               bg=COLORS['entry_bg'], fg=COLORS['fg'], relief='flat',
                               font=FONT_NORMAL)
    app.summary_text.grid(row=0, column=0, sticky=(tk.W, tk.E))
    app.summary_frame.grid_remove()


def show_main_content(app: 'VidSeek'):
    """Dismiss the loading gate (only ever called once)."""
    app.loading_frame.grid_remove()
    app.content_frame.grid(row=1, column=0, sticky=(tk.W, tk.E, tk.N, tk.S))


def _set_visible(widget, visible: bool):
    if visible:
        widget.grid()
    else:
        widget.grid_remove()


def update_ui_state(app: 'VidSeek'):
    """Sync widgets with the Session."""
    if not app.root:
        return
    session = app.session

    app.file_label.config(text=session.selected_file.name if session.selected_file else "No file selected")

    app.upload_btn.config(
        state=tk.NORMAL if session.can_upload() else tk.DISABLED,
        text="Processing..." if session.is_uploading else "Upload & Process Video"
    )

    status = session.upload_status
    if session.upload.phase is Phase.FAILED or (status and session.selected_file is None):
        status_style = 'Error.TLabel'
    elif session.upload.phase is Phase.SUCCEEDED:
        status_style = 'Success.TLabel'
    else:
        status_style = 'Card.TLabel'
    app.upload_status_label.config(text=status, style=status_style)

    has_video = session.active_video_id is not None
    _set_visible(app.download_btn, has_video)
    _set_visible(app.video_frame, session.preview is not None)
    _set_visible(app.search_frame, has_video)

    app.search_btn.config(
        state=tk.DISABLED if session.is_searching else tk.NORMAL,
        text="Searching..." if session.is_searching else "Search"
    )
    if app.search_var.get() != session.search_query:
        app.search_var.set(session.search_query)

    render_results(app)
    render_summary(app)


def render_results(app: 'VidSeek'):
    """Rebuild the results list from session.results, in backend order."""
    for child in app.results_frame.winfo_children():
        child.destroy()

    results = app.session.results
    _set_visible(app.results_frame, bool(results))

    for index, result in enumerate(results):
        chunk = result.chunk
        card = ttk.Frame(app.results_frame, style='Card.TFrame', padding="10")
        card.grid(row=index, column=0, sticky=(tk.W, tk.E), pady=4)
        card.columnconfigure(0, weight=1)

        ttk.Label(card, text=format_time_range(chunk.start_time, chunk.end_time),
                  style='Badge.TLabel').grid(row=0, column=0, sticky=tk.W)
        ttk.Label(card, text=f"Score: {format_score(result.similarity_score)}",
                  style='Score.TLabel').grid(row=0, column=1, sticky=tk.E)
        ttk.Label(card, text=chunk.text, style='Card.TLabel',
                  wraplength=450).grid(row=1, column=0, columnspan=2, sticky=tk.W, pady=(5, 5))
        ttk.Button(card, text=f"Jump to {format_time(chunk.start_time)}",
                   command=lambda t=chunk.start_time: app._on_jump(t)).grid(
                       row=2, column=0, sticky=tk.W)


def render_summary(app: 'VidSeek'):
    summary = app.session.summary
    _set_visible(app.summary_frame, bool(summary))
    app.summary_text.config(state=tk.NORMAL)
    app.summary_text.delete("1.0", tk.END)
    if summary:
        app.summary_text.insert(tk.END, summary)
    app.summary_text.config(state=tk.DISABLED)
