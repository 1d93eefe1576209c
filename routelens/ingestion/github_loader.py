import logging
import re
import shutil
import tempfile

import git  # from gitpython

logger = logging.getLogger('routelens')


def is_github_url(input_str: str) -> bool:
    """
    Check if the input looks like a GitHub URL.
    Handles formats like:
      https://github.com/user/repo
      https://github.com/user/repo.git
      github.com/user/repo
    """
    return bool(re.match(r'(https?://)?(www\.)?github\.com/[\w.-]+/[\w.-]+', input_str))


def normalize_github_url(url: str) -> str:
    """Ensure the URL has a scheme and a .git suffix so GitPython can clone it."""
    if not url.startswith('http'):
        url = 'https://' + url
    if not url.endswith('.git'):
        url = url.rstrip('/') + '.git'
    return url


def clone_repo(github_url: str) -> tuple[str, callable]:
    """
    Shallow-clone a GitHub repo into a temporary directory.

    Returns:
        repo_path: path to the cloned repo on disk
        cleanup:   call when done to delete the temp folder

    Usage:
        repo_path, cleanup = clone_repo(url)
        try:
            analyze_routes(os.path.join(repo_path, 'app.js'))
        finally:
            cleanup()
    """
    url = normalize_github_url(github_url)

    tmp_dir = tempfile.mkdtemp(prefix='routelens_')
    logger.info(f"Cloning {url}")
    logger.debug(f"Into temp folder: {tmp_dir}")

    try:
        git.Repo.clone_from(url, tmp_dir, depth=1)
        logger.info("Clone complete")
    except git.exc.GitCommandError as e:
        shutil.rmtree(tmp_dir, ignore_errors=True)
        raise ValueError(f"Failed to clone repo: {e}")

    def cleanup():
        shutil.rmtree(tmp_dir, ignore_errors=True)
        logger.debug(f"Cleaned up temp folder {tmp_dir}")

    return tmp_dir, cleanup
