# bookwise/tasks/scheduler.py
from __future__ import annotations

import atexit
import os

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger


def start_scheduler(app):
    """
    Teslim hatırlatma job'unu APScheduler ile periyodik çalıştırır.
    - SCHEDULER_ENABLED kapalıysa (testler) hiç başlamaz.
    - Debug reloader'da çift çalışmayı engeller.
    """
    if not app.config.get("SCHEDULER_ENABLED"):
        app.logger.info("[scheduler] disabled by config.")
        return None

    # Werkzeug reloader varsa WERKZEUG_RUN_MAIN=true olan process gerçek process'tir.
    if app.debug and os.environ.get("WERKZEUG_RUN_MAIN") != "true":
        app.logger.info("[scheduler] Debug reloader secondary process: scheduler skipped.")
        return None

    # circular import olmasın
    from bookwise.tasks.due_reminders import run_due_reminder_job

    scheduler = BackgroundScheduler(timezone="UTC")
    minutes = app.config.get("REMINDER_INTERVAL_MINUTES", 60)

    def _job_wrapper():
        try:
            run_due_reminder_job(app)
        except Exception as ex:
            app.logger.exception(f"[scheduler] due_reminder_job error: {ex}")

    scheduler.add_job(
        func=_job_wrapper,
        trigger=IntervalTrigger(minutes=minutes),
        id="due_reminder_job",
        replace_existing=True,
        max_instances=1,        # aynı job üst üste binmesin
        coalesce=True,          # kaçırılanları tek seferde toparla
        misfire_grace_time=120
    )

    scheduler.start()
    app.logger.info(f"[scheduler] Due reminder job started (every {minutes} minutes).")
    app.extensions["apscheduler"] = scheduler

    # process kapanınca scheduler dursun
    atexit.register(lambda: scheduler.shutdown(wait=False) if scheduler.running else None)
    return scheduler
