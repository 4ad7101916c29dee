import logging
import threading
from typing import Optional

import requests
from selenium import webdriver
from selenium.webdriver.chrome.options import Options
from goalflow.config import settings

logger = logging.getLogger(__name__)

# Hides the automation flag that reCAPTCHA and LinkedIn look for.
STEALTH_SCRIPT = "Object.defineProperty(navigator, 'webdriver', { get: () => false });"


class SessionUnavailable(RuntimeError):
    """No browser-automation session could be obtained."""


class SeleniumExecutor:
    """
    Manages the lifecycle of a Selenium WebDriver instance.
    Supports Hybrid Mode:
    - Local: Uses undetected-chromedriver with a persistent profile directory
      so LinkedIn logins survive between runs
    - Remote: Uses Selenium Grid
    """
    def __init__(
        self,
        use_local: Optional[bool] = None,
        headless: Optional[bool] = None,
        user_data_dir: Optional[str] = None,
        remote_url: Optional[str] = None,
    ):
        """Initialize executor state and mode."""
        self.driver = None
        self.use_local = settings.USE_LOCAL_BROWSER if use_local is None else use_local
        self.headless = settings.HEADLESS if headless is None else headless
        self.user_data_dir = user_data_dir or settings.BROWSER_USER_DATA_DIR
        self.remote_url = remote_url or settings.SELENIUM_REMOTE_URL
        self._lock = threading.Lock()
        self._abandoned = False

    def _chrome_arguments(self):
        args = [
            "--no-sandbox",
            "--disable-setuid-sandbox",
            "--disable-dev-shm-usage",
            "--window-size=1920,1080",
            "--disable-blink-features=AutomationControlled",
            "--disable-infobars",
            "--lang=en-US,en",
        ]
        if self.headless:
            args.append("--headless=new")
        return args

    def start(self):
        """Initializes the webdriver connection based on mode."""
        if self.driver:
            return

        if self.use_local:
            driver = self._start_local()
        else:
            driver = self._start_remote()

        with self._lock:
            if self._abandoned:
                # The caller stopped waiting for this session; don't leak the browser.
                logger.warning("⚠️ Session started after the caller gave up, quitting it")
                self._quit(driver)
                raise SessionUnavailable("Session started after startup timeout")
            self.driver = driver

        driver.set_page_load_timeout(settings.PAGE_LOAD_TIMEOUT)
        if self._execute_cdp_command("Page.addScriptToEvaluateOnNewDocument", {"source": STEALTH_SCRIPT}):
            logger.info("🥷 Stealth script installed")
        logger.info(f"✅ Created driver session: {driver.session_id}")

    def _start_local(self):
        # --- LOCAL EXECUTION ---
        logger.info("🔌 Initializing Driver (LOCAL Mode)...")
        try:
            import undetected_chromedriver as uc
        except ImportError as e:
            raise SessionUnavailable(f"undetected-chromedriver is not installed: {e}") from e

        uc_options = uc.ChromeOptions()
        for arg in self._chrome_arguments():
            if "--headless" not in arg:
                uc_options.add_argument(arg)
        uc_options.add_argument("--no-first-run")
        uc_options.add_argument("--no-default-browser-check")

        try:
            return uc.Chrome(
                options=uc_options,
                user_data_dir=self.user_data_dir,
                version_main=None,
                headless=self.headless,
                use_subprocess=True,
            )
        except Exception as e:
            logger.error(f"❌ Failed to start local driver: {e}")
            raise SessionUnavailable(f"Chrome launch failed: {e}") from e

    def _start_remote(self):
        # --- REMOTE GRID EXECUTION ---
        logger.info(f"🔌 Initializing Driver (REMOTE Mode at {self.remote_url})...")
        if not self.grid_ready():
            raise SessionUnavailable(f"Selenium Grid at {self.remote_url} is not ready")

        chrome_options = Options()
        for arg in self._chrome_arguments():
            chrome_options.add_argument(arg)
        chrome_options.add_experimental_option("excludeSwitches", ["enable-automation"])
        chrome_options.add_experimental_option("useAutomationExtension", False)
        try:
            return webdriver.Remote(command_executor=self.remote_url, options=chrome_options)
        except Exception as e:
            logger.error(f"❌ Failed to connect to Selenium Grid: {e}")
            raise SessionUnavailable(f"Grid session failed: {e}") from e

    def grid_ready(self) -> bool:
        """Query the Grid status endpoint before asking it for a session."""
        grid_url = self.remote_url.replace("/wd/hub", "").rstrip("/")
        try:
            response = requests.get(f"{grid_url}/status", timeout=5)
        except requests.RequestException as e:
            logger.warning(f"Could not query Grid status: {e}")
            return False
        if response.status_code != 200:
            logger.warning(
                "Grid status: status=%s body=%s",
                response.status_code,
                response.text[:500],
            )
            return False
        try:
            return bool(response.json().get("value", {}).get("ready"))
        except ValueError:
            return False

    def _execute_cdp_command(self, cmd: str, params: dict) -> bool:
        """Execute CDP command across local and remote driver implementations."""
        if not self.driver:
            return False

        # Local Chrome and some Selenium bindings expose execute_cdp_cmd directly.
        try:
            execute_cdp = getattr(self.driver, "execute_cdp_cmd", None)
            if callable(execute_cdp):
                execute_cdp(cmd, params)
                return True
        except Exception as e:
            logger.debug("CDP via execute_cdp_cmd failed for %s: %s", cmd, e)

        # RemoteWebDriver may only support the generic command executor API.
        try:
            execute = getattr(self.driver, "execute", None)
            command_executor = getattr(self.driver, "command_executor", None)
            if callable(execute) and command_executor is not None:
                commands = getattr(command_executor, "_commands", None)
                if isinstance(commands, dict):
                    commands.setdefault(
                        "executeCdpCommand",
                        ("POST", "/session/$sessionId/goog/cdp/execute"),
                    )
                execute("executeCdpCommand", {"cmd": cmd, "params": params})
                return True
        except Exception as e:
            logger.debug("CDP via execute() failed for %s: %s", cmd, e)

        return False

    def abandon(self):
        """Mark a pending start() as unwanted and release whatever is already open."""
        with self._lock:
            self._abandoned = True
        self.stop()

    @staticmethod
    def _quit(driver):
        try:
            driver.quit()
        except Exception as e:
            logger.warning(f"Error quitting driver: {e}")

    def stop(self):
        """Quits the webdriver session."""
        with self._lock:
            driver, self.driver = self.driver, None
        if driver:
            logger.info("🛑 Quitting webdriver session...")
            self._quit(driver)
