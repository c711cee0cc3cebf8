"""The registration site: the form page and the submission endpoint.

``GET /`` serves the form. ``POST /register`` parses the body, re-runs
the shared validator (unless the app is configured to trust the
client), normalizes the submission, logs it, and answers with a
confirmation page. A photo over the upload limit brings the form back
with status 413.

Run:
    regdesk --port 3000
"""

import logging

from regdesk.app import App
from regdesk.config import AppConfig
from regdesk.errors import BotSubmission, PayloadTooLarge
from regdesk.http.request import Request
from regdesk.submissions import log_submission, normalize_submission, transport_fields
from regdesk.templating.returns import Template
from regdesk.validation import REGISTRATION_FIELDS, FormState, Invalid, validate
from regdesk.validation.registration import PHOTO_MESSAGE
from regdesk.views import field_views

logger = logging.getLogger("regdesk.server")


def _form_page(state: FormState) -> Template:
    form = field_views(state, REGISTRATION_FIELDS)
    summary = [view for view in vars(form).values() if view.invalid]
    return Template("register.html", form=form, summary=summary)


def create_app(config: AppConfig | None = None) -> App:
    """Build the registration app with its two routes."""
    app = App(config=config)

    @app.route("/")
    def index():
        """Show the empty registration form."""
        return _form_page(FormState.empty(REGISTRATION_FIELDS))

    @app.route("/register", methods=["POST"])
    async def register(request: Request):
        """Handle a registration submission."""
        form = await request.form(max_file_size=app.config.max_upload_bytes)

        if app.config.validate_submissions:
            state = FormState.from_form(form, REGISTRATION_FIELDS)
            try:
                report = validate(state, REGISTRATION_FIELDS)
            except BotSubmission as exc:
                logger.warning("Blocked bot submission (honeypot %r filled)", exc.field)
                return Template("blocked.html"), 403
            if not report:
                logger.info("Rejected submission: %d invalid field(s)", len(report.errors))
                return _form_page(state.with_report(report)), 422

        payload = normalize_submission(transport_fields(form), form.files.get("photo"))
        log_submission(payload)
        return Template("received.html", submitted_at=payload.submitted_at)

    @app.error(PayloadTooLarge)
    def upload_too_large():
        """An oversized photo: a fresh form with the photo message."""
        state = FormState.empty(REGISTRATION_FIELDS)
        return _form_page(FormState(state.values, {"photo": Invalid(PHOTO_MESSAGE)})), 413

    @app.on_startup
    def announce() -> None:
        logger.info("Server listening on http://%s:%d", app.config.host, app.config.port)

    @app.on_shutdown
    def farewell() -> None:
        logger.info("Server stopped")

    return app
