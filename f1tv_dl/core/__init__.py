"""
Core application engine for orchestrating the download process.

The `DownloadManager` resolves content, channels and manifests in order and
hands the selected renditions to ffmpeg.
"""
