"""
FlashCalc
Desktop entry point: runs the calculator widget with the web portal alongside
"""
import atexit
import logging
import os
import subprocess
import sys
import tkinter as tk

import config
from api import open_store
from gui import FlashCalcGUI

logger = logging.getLogger(__name__)


def start_api_server():
    """Launch api.py in its own process; returns None if it cannot start"""
    api_path = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'api.py')
    try:
        process = subprocess.Popen(
            [sys.executable, api_path],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except OSError as e:
        logger.error("Failed to start API server: %s", e)
        return None
    logger.info("Web portal on http://localhost:%s (PID %s)", config.WEB_PORT, process.pid)
    return process


def stop_api_server(process):
    if process is None or process.poll() is not None:
        return
    process.terminate()
    try:
        process.wait(timeout=5)
    except subprocess.TimeoutExpired:
        logger.warning("API server did not stop, killing PID %s", process.pid)
        process.kill()


def main():
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)

    api_process = start_api_server()
    atexit.register(stop_api_server, api_process)

    root = tk.Tk()
    FlashCalcGUI(root, open_store())
    root.mainloop()


if __name__ == "__main__":
    main()
