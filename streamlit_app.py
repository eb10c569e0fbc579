"""
BaseLine Academy - Site & Coach Console
Public pages, role-gated coach dashboard and read-only parent dashboard
"""

import logging
from datetime import date, datetime, timedelta

import streamlit as st
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from api import AcademyAPIClient, AcademyError
from config import ConfigManager
from database import DatabaseManager, LocalStorage
from models import AGE_GROUPS, MATCH_TYPES, PROGRAMS, ExpiryPolicy, Role, TournamentStatus
from services import (
    AnnouncementService,
    AttendanceBoard,
    AuthService,
    NothingToExport,
    RegistrationForm,
    RegistrationService,
    RosterService,
    Session,
    TournamentForm,
    TournamentService,
    ValidationError,
    guard,
)
from services import messages
from services.forms import BookingForm, ContactForm, submit_booking, submit_contact
from services.registrations import team_size_for
import site_content

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

PUBLIC_PAGES = {
    "home": "🏀 Home",
    "about": "ℹ️ About",
    "programs": "📋 Programs",
    "schedule": "📅 Schedule",
    "tournaments": "🏆 Tournaments",
    "gallery": "📷 Gallery",
    "contact": "✉️ Contact",
}

DASHBOARD_FOR_ROLE = {
    Role.COACH: "coach",
    Role.PARENT: "parent",
}


def setup_logging(level_name):
    logging.basicConfig(level=getattr(logging, str(level_name).upper(), logging.INFO),
                        format=LOG_FORMAT)


@st.cache_resource
def load_settings():
    """Configuration shared by every session"""
    return ConfigManager.load_config()


@st.cache_resource
def get_database(db_path):
    """Initialize the local store once per process"""
    db_manager = DatabaseManager(db_path)
    db_manager.initialize_database()
    return db_manager


def get_services():
    """Per-tab service objects; the API client carries this tab's token"""
    if "services" not in st.session_state:
        settings = load_settings()
        db_manager = get_database(settings['storage']['db_path'])
        storage = LocalStorage(db_manager)
        client = AcademyAPIClient(settings['api']['base_url'], timeout=settings['api']['timeout'])
        mock_mode = bool(settings['api']['mock_mode'])

        st.session_state.services = {
            "db": db_manager,
            "storage": storage,
            "client": client,
            "auth": AuthService(client, mock_mode=mock_mode),
            "attendance": AttendanceBoard(client, settings['attendance']['max_days_ahead']),
            "registrations": RegistrationService(client, storage, mock_mode=mock_mode),
            "tournaments": TournamentService(client, db_manager),
            "roster": RosterService(client, storage, db_manager),
            "announcements": AnnouncementService(settings['announcements']['backend'],
                                                 storage=storage, client=client),
        }
    return st.session_state.services


def get_session():
    if "session" not in st.session_state:
        st.session_state.session = Session()
    return st.session_state.session


def go_to(page, flash=None):
    st.session_state.page = page
    if flash:
        st.session_state.flash = flash
    st.rerun()


def show_errors(errors):
    for error in errors:
        st.error(error)


def main():
    st.set_page_config(
        page_title="BaseLine Academy",
        page_icon="🏀",
        layout="wide",
        initial_sidebar_state="expanded"
    )

    settings = load_settings()
    setup_logging(settings['logging']['level'])

    services = get_services()
    session = get_session()
    services["auth"].restore(session)

    if "page" not in st.session_state:
        st.session_state.page = "home"

    # Header
    st.markdown("""
    <div style="text-align: center; margin-bottom: 30px;">
        <h1>🏀 BaseLine Academy</h1>
        <p style="color: #666;">Elite Basketball Training</p>
    </div>
    """, unsafe_allow_html=True)

    show_sidebar(session)

    flash = st.session_state.pop("flash", None)
    if flash:
        st.warning(flash)

    page = st.session_state.page
    if page == "coach":
        show_coach_dashboard()
    elif page == "parent":
        show_parent_dashboard()
    elif page == "login":
        show_login()
    elif page == "about":
        show_about()
    elif page == "programs":
        show_programs()
    elif page == "schedule":
        show_schedule()
    elif page == "tournaments":
        show_tournaments()
    elif page == "gallery":
        show_gallery()
    elif page == "contact":
        show_contact()
    else:
        show_home()


def show_sidebar(session):
    with st.sidebar:
        st.markdown("### Navigation")
        for page, label in PUBLIC_PAGES.items():
            if st.button(label, key=f"nav_{page}", use_container_width=True):
                go_to(page)

        st.markdown("### Account")
        if session.is_authenticated:
            st.success(f"Signed in as {session.email} ({session.role.value})")
            dashboard = DASHBOARD_FOR_ROLE.get(session.role)
            if dashboard and st.button("📊 My Dashboard", use_container_width=True):
                go_to(dashboard)
            if st.button("🚪 Logout", use_container_width=True):
                logout()
        else:
            if st.button("🔑 Login", use_container_width=True):
                go_to("login")


def logout():
    services = get_services()
    try:
        services["auth"].logout(get_session())
    except AcademyError as e:
        logger.warning("Server logout failed: %s", e)
    st.session_state.session = Session()
    st.toast("Logged out")
    go_to("login")


# ================== PUBLIC PAGES ==================

def show_home():
    services = get_services()
    try:
        announcement = services["announcements"].current()
    except AcademyError as e:
        logger.error("Could not read announcement: %s", e)
        announcement = None

    if announcement:
        st.info(f"📢 {announcement.message}")

    st.subheader("Train Like a Pro")
    st.markdown("Structured batches, experienced coaches and regular tournaments for players aged 8 and up.")

    cols = st.columns(len(site_content.PROGRAM_DETAILS))
    for col, program in zip(cols, site_content.PROGRAM_DETAILS):
        with col:
            st.markdown(f"#### {program['title']}")
            st.metric("Price", f"{program['price']} {program['period']}")
            st.write(program['description'])

    if st.button("View Programs", type="primary"):
        go_to("programs")


def show_about():
    st.subheader("ℹ️ About BaseLine Academy")

    st.markdown("### Our Story")
    for paragraph in site_content.ABOUT_STORY:
        st.write(paragraph)

    st.markdown("### Meet Our Coaches")
    cols = st.columns(len(site_content.COACHES))
    for col, coach in zip(cols, site_content.COACHES):
        with col:
            st.markdown(f"**{coach['name']}**")
            st.caption(coach['role'])
            st.write(coach['bio'])

    st.markdown("### Our Training Philosophy")
    for title, text in site_content.PHILOSOPHY:
        st.markdown(f"**{title}:** {text}")


def show_programs():
    st.subheader("📋 Training Programs")

    for program in site_content.PROGRAM_DETAILS:
        title = f"⭐ {program['title']} (Most Popular)" if program['featured'] else program['title']
        with st.expander(title, expanded=program['featured']):
            st.markdown(f"**{program['price']}** {program['period']}")
            st.write(program['description'])
            for feature in program['features']:
                st.write(f"• {feature}")
            st.caption(f"Ideal for: {program['ideal']}")

    st.markdown("---")
    st.markdown("### Frequently Asked Questions")
    for question, answer in site_content.FAQ:
        with st.expander(question):
            st.write(answer)


def show_schedule():
    st.subheader("📅 Book a Session")

    batch_titles = {batch['title']: batch['id'] for batch in site_content.BATCHES}
    selected_title = st.radio("Choose a program", list(batch_titles.keys()), horizontal=True)
    batch_id = batch_titles[selected_title]
    batch = site_content.batch_by_id(batch_id)
    st.caption(f"{batch['price']} · {len(batch['schedule'])} days per week")

    slots = site_content.time_slots(batch_id)

    with st.form("booking_form"):
        time_slot = st.selectbox("Time Slot*", slots)
        col1, col2 = st.columns(2)
        with col1:
            name = st.text_input("Full Name*")
            email = st.text_input("Email*")
        with col2:
            phone = st.text_input("Phone*")
            age = st.text_input("Age*")
        levels = site_content.EXPERIENCE_LEVELS
        experience = st.selectbox("Experience", list(levels.keys()), format_func=levels.get)

        if st.form_submit_button("Request Booking", type="primary"):
            form = BookingForm(batch=batch_id, time_slot=time_slot, name=name, email=email,
                               phone=phone, age=age, experience=experience)
            try:
                st.success(submit_booking(form))
            except ValidationError as e:
                show_errors(e.messages)


def show_tournaments():
    st.subheader("🏆 BaseLine Tournaments")
    services = get_services()

    try:
        upcoming = services["tournaments"].upcoming()
        past = services["tournaments"].past()
    except AcademyError as e:
        logger.error("Could not load tournaments: %s", e)
        st.error(messages.TRY_AGAIN)
        upcoming, past = [], []

    st.markdown("### Upcoming Tournaments")
    if not upcoming:
        st.info("No upcoming tournaments at the moment.")

    today = date.today()
    for tournament in upcoming:
        with st.expander(f"{tournament.title} · {tournament.date:%B %d, %Y}", expanded=True):
            col1, col2, col3 = st.columns(3)
            with col1:
                st.markdown(f"**Location:** {tournament.location}")
            with col2:
                st.markdown(f"**Format:** {tournament.match_type}")
            with col3:
                st.markdown(f"**Age Groups:** {', '.join(tournament.age_groups)}")
            if tournament.description:
                st.write(tournament.description)
            if tournament.registration_open and tournament.registration_close:
                st.caption(f"Registration: {tournament.registration_open} to {tournament.registration_close}")

            if tournament.registration_is_open(today):
                show_registration_form(tournament)
            else:
                st.warning("Registration for this tournament is closed.")

    st.markdown("---")
    st.markdown("### Past Tournaments")
    if past:
        for tournament in past:
            st.markdown(f"**{tournament.title}** · {tournament.date:%B %d, %Y} · {tournament.location}")
            if tournament.description:
                st.caption(tournament.description)
    else:
        for tournament in site_content.PAST_TOURNAMENTS:
            st.markdown(f"**{tournament['title']}** · {tournament['date']} · {tournament['location']}")
            st.caption(tournament['description'])
            st.write(f"🏅 {tournament['results']}")


def show_registration_form(tournament):
    services = get_services()
    min_size, max_size, description = team_size_for(tournament.match_type)

    with st.form(f"register_{tournament.id}"):
        st.markdown(f"#### Register for {tournament.title}")
        st.caption(f"Team size: {description}")
        team_name = st.text_input("Team Name*", key=f"team_{tournament.id}")
        col1, col2 = st.columns(2)
        with col1:
            first_name = st.text_input("Captain First Name*", key=f"first_{tournament.id}")
            email = st.text_input("Email*", key=f"email_{tournament.id}")
        with col2:
            last_name = st.text_input("Captain Last Name*", key=f"last_{tournament.id}")
            phone = st.text_input("Phone Number*", key=f"phone_{tournament.id}")

        st.markdown("**Other Players**")
        others = [st.text_input(f"Player {i + 2}", key=f"player_{tournament.id}_{i}")
                  for i in range(max_size - 1)]
        questions = st.text_area("Questions or comments", key=f"questions_{tournament.id}")

        if st.form_submit_button("Register Team", type="primary"):
            form = RegistrationForm(team_name=team_name, captain_first_name=first_name,
                                    captain_last_name=last_name, email=email, phone=phone,
                                    other_players=others, questions=questions)
            try:
                services["registrations"].submit(tournament, form)
                st.success(messages.REGISTRATION_SUCCESS)
            except ValidationError as e:
                show_errors(e.messages)
            except AcademyError as e:
                logger.error("Registration for tournament %s failed: %s", tournament.id, e)
                st.error(messages.REGISTRATION_FAILED)


def show_gallery():
    st.subheader("📷 Gallery")
    cols = st.columns(3)
    for i, caption in enumerate(site_content.GALLERY_CAPTIONS):
        with cols[i % 3]:
            st.markdown(f"🖼️ {caption}")

    st.markdown("### Training Videos")
    for title in site_content.TRAINING_VIDEOS:
        st.write(f"▶️ {title}")


def show_contact():
    st.subheader("✉️ Contact Us")
    with st.form("contact_form", clear_on_submit=True):
        col1, col2 = st.columns(2)
        with col1:
            name = st.text_input("Name*")
        with col2:
            email = st.text_input("Email*")
        subject = st.text_input("Subject*")
        message = st.text_area("Message*")

        if st.form_submit_button("Send Message", type="primary"):
            try:
                st.success(submit_contact(ContactForm(name, email, subject, message)))
            except ValidationError as e:
                show_errors(e.messages)

    st.markdown("### Frequently Asked Questions")
    for question, answer in site_content.FAQ:
        with st.expander(question):
            st.write(answer)


def show_login():
    st.subheader("🔑 Login")
    services = get_services()

    with st.form("login_form"):
        role_label = st.radio("I am a", ["Coach", "Parent"], horizontal=True)
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")

        if st.form_submit_button("Login", type="primary"):
            role = Role.COACH if role_label == "Coach" else Role.PARENT
            try:
                session = services["auth"].login(email, password, role)
            except ValidationError as e:
                show_errors(e.messages)
                return
            except AcademyError as e:
                logger.warning("Login failed for %s: %s", email, e)
                st.error("Invalid email or password.")
                return

            st.session_state.session = session
            st.toast("Login successful!")
            go_to(DASHBOARD_FOR_ROLE.get(session.role, "home"))


# ================== COACH DASHBOARD ==================

def require_role(role):
    """Re-checked on every render; bounces to login with the reason"""
    decision = guard(get_session(), role)
    if not decision.allowed:
        go_to(decision.redirect_to, decision.message)
    return decision.allowed


def show_coach_dashboard():
    if not require_role(Role.COACH):
        return

    st.subheader("📊 Coach Dashboard")

    tab1, tab2, tab3, tab4, tab5, tab6 = st.tabs([
        "✅ Attendance",
        "👥 Players",
        "🏆 Tournaments",
        "📝 Registrations",
        "📢 Announcements",
        "⚙️ System"
    ])

    with tab1:
        show_attendance()

    with tab2:
        show_players()

    with tab3:
        show_tournament_admin()

    with tab4:
        show_registrations()

    with tab5:
        show_announcements()

    with tab6:
        show_system()


def show_attendance():
    services = get_services()
    board = services["attendance"]

    today = date.today()
    day = st.date_input("Session date", today, key="attendance_date").isoformat()

    try:
        if not board.players:
            board.load_players()
        if st.session_state.get("attendance_loaded") != day:
            board.load(day)
            st.session_state.attendance_loaded = day
            st.session_state.attendance_version = st.session_state.get("attendance_version", 0) + 1
    except AcademyError as e:
        logger.error("Could not load attendance for %s: %s", day, e)
        st.error(messages.TRY_AGAIN)
        return

    board.select(day)
    disabled = board.is_disabled(day)
    if disabled:
        st.info(messages.ATTENDANCE_DATE_DISABLED.format(days=board.max_days_ahead))

    if not board.players:
        st.warning("No players on the roster yet")
        return

    version = st.session_state.get("attendance_version", 0)
    col1, col2, col3, col4 = st.columns(4)
    with col1:
        if st.button("Select All", disabled=disabled):
            board.mark_all(True)
            st.session_state.attendance_version = version + 1
            st.rerun()
    with col2:
        if st.button("Clear All", disabled=disabled):
            board.mark_all(False)
            st.session_state.attendance_version = version + 1
            st.rerun()
    with col3:
        if st.button("🔄 Reload"):
            st.session_state.attendance_loaded = None
            st.rerun()
    with col4:
        save_clicked = st.button("💾 Save Attendance", type="primary", disabled=disabled)

    for program, players in services["roster"].by_program(board.players).items():
        if not players:
            continue
        st.markdown(f"#### {program} Program")
        marks = board.current(day)
        for player in players:
            checked = st.checkbox(f"{player.name} ({player.attended_classes} classes)",
                                  value=marks.get(player.id, False), disabled=disabled,
                                  key=f"att_{day}_{version}_{player.id}")
            if checked != marks.get(player.id, False):
                board.toggle(player.id, day)

    if save_clicked:
        try:
            board.save(day)
            st.toast(messages.ATTENDANCE_SAVED)
        except AcademyError as e:
            logger.error("Saving attendance for %s failed: %s", day, e)
            st.error(messages.ATTENDANCE_SAVE_FAILED)

    summary = board.summary(day)
    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Present", summary["present"])
    with col2:
        st.metric("Absent", summary["absent"])
    with col3:
        st.metric("Total Players", summary["total"])

    if board.unsaved_dates:
        st.warning(f"Unsaved changes for: {', '.join(board.unsaved_dates)}")


def show_players():
    services = get_services()
    roster = services["roster"]

    try:
        players = roster.list()
    except AcademyError as e:
        logger.error("Could not load players: %s", e)
        st.error(messages.TRY_AGAIN)
        return

    program_filter = st.selectbox("Filter by Program", ["All Programs"] + list(PROGRAMS),
                                  key="players_program_filter")
    shown = players if program_filter == "All Programs" else [p for p in players if p.program == program_filter]
    st.dataframe(roster.as_dataframe(shown), use_container_width=True, hide_index=True)

    col1, col2 = st.columns(2)

    with col1:
        st.markdown("#### ➕ Add Player")
        with st.form("add_player_form", clear_on_submit=True):
            name = st.text_input("Player Name*")
            program = st.selectbox("Program*", PROGRAMS)
            age = st.number_input("Age", min_value=0, max_value=99, value=0,
                                  help="Leave at 0 if unknown")
            if st.form_submit_button("Add Player", type="primary"):
                try:
                    player = roster.add(name, program, int(age) or None)
                    services["attendance"].players = []
                    st.success(f"Player '{player.name}' added")
                except ValidationError as e:
                    show_errors(e.messages)
                except AcademyError as e:
                    logger.error("Adding player failed: %s", e)
                    st.error(messages.TRY_AGAIN)

    with col2:
        st.markdown("#### ➖ Remove Player")
        if players:
            options = {f"{p.name} ({p.program})": p.id for p in players}
            with st.form("remove_player_form"):
                selected = st.selectbox("Select Player", list(options.keys()))
                confirm = st.checkbox("I understand this removes the player")
                if st.form_submit_button("Remove Player"):
                    if not confirm:
                        st.error("Please confirm the removal")
                    else:
                        try:
                            roster.remove(options[selected])
                            services["attendance"].players = []
                            st.success(f"Removed {selected}")
                        except AcademyError as e:
                            logger.error("Removing player failed: %s", e)
                            st.error(messages.TRY_AGAIN)

    if players:
        st.markdown("---")
        st.markdown("#### 📈 Player Profile")
        options = {p.name: p for p in players}
        selected = st.selectbox("Player", list(options.keys()), key="profile_player")
        player = options[selected]
        show_player_profile(roster, player)

        with st.expander("Update Ratings"):
            with st.form("ratings_form"):
                current = roster.performance(player.id)
                ratings = {skill: st.slider(skill.title(), 0, 100, int(value))
                           for skill, value in current.items()}
                games = st.number_input("Games Played", min_value=0,
                                        value=int(roster.stats(player.id)["gamesPlayed"]))
                if st.form_submit_button("Save Ratings"):
                    try:
                        roster.record_stats(player.id, {"gamesPlayed": int(games)}, ratings)
                        st.success("Ratings saved")
                    except ValidationError as e:
                        show_errors(e.messages)


def show_player_profile(roster, player):
    stats = roster.stats(player.id)
    performance = roster.performance(player.id)

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Classes Attended", player.attended_classes)
    with col2:
        st.metric("Games Played", stats["gamesPlayed"])
    with col3:
        st.metric("Points / Game", f"{stats['pointsPerGame']:.1f}")
    with col4:
        st.metric("Assists / Game", f"{stats['assistsPerGame']:.1f}")

    skills = list(performance.keys())
    values = [performance[skill] for skill in skills]
    fig = go.Figure(data=go.Scatterpolar(r=values + values[:1], theta=skills + skills[:1], fill='toself'))
    fig.update_layout(polar=dict(radialaxis=dict(visible=True, range=[0, 100])),
                      showlegend=False, title=f"{player.name} - Skill Ratings")
    st.plotly_chart(fig, use_container_width=True)


def show_tournament_admin():
    services = get_services()
    tournaments = services["tournaments"]
    today = date.today()

    try:
        all_tournaments = tournaments.list()
    except AcademyError as e:
        logger.error("Could not load tournaments: %s", e)
        st.error(messages.TRY_AGAIN)
        all_tournaments = []

    if all_tournaments:
        display_df = pd.DataFrame([
            {
                "ID": t.id,
                "Title": t.title,
                "Date": t.date,
                "Location": t.location,
                "Format": t.match_type,
                "Age Groups": ", ".join(t.age_groups),
                "Status": t.effective_status(today).value.title(),
            }
            for t in all_tournaments
        ])
        st.dataframe(display_df, use_container_width=True, hide_index=True)
    else:
        st.info("No tournaments yet")

    col1, col2 = st.columns(2)

    with col1:
        st.markdown("#### ➕ Create Tournament")
        with st.form("create_tournament_form"):
            title = st.text_input("Title*")
            tournament_date = st.date_input("Tournament Date*", today + timedelta(days=30))
            location = st.text_input("Location*")
            description = st.text_area("Description")
            match_type = st.selectbox("Match Type*", MATCH_TYPES)
            age_groups = st.multiselect("Age Groups*", AGE_GROUPS)
            registration_open = st.date_input("Registration Opens*", today)
            registration_close = st.date_input("Registration Closes*", today + timedelta(days=14))

            if st.form_submit_button("Create Tournament", type="primary"):
                form = TournamentForm(title=title, tournament_date=tournament_date,
                                      location=location, description=description,
                                      match_type=match_type, age_groups=age_groups,
                                      registration_open=registration_open,
                                      registration_close=registration_close)
                try:
                    created = tournaments.create(form)
                    st.success(f"✅ Tournament '{created.title}' created!")
                except ValidationError as e:
                    show_errors(e.messages)
                except AcademyError as e:
                    logger.error("Creating tournament failed: %s", e)
                    st.error(messages.TRY_AGAIN)

    with col2:
        st.markdown("#### ❌ Cancel Tournament")
        cancellable = [t for t in all_tournaments
                       if t.effective_status(today) is TournamentStatus.UPCOMING]
        if not cancellable:
            st.info("No upcoming tournaments to cancel")
            return
        options = {f"{t.title} ({t.date})": t for t in cancellable}
        with st.form("cancel_tournament_form"):
            selected = st.selectbox("Tournament", list(options.keys()))
            confirmed = st.checkbox("Yes, cancel this tournament. Registrations are kept.")
            if st.form_submit_button("Cancel Tournament"):
                try:
                    tournaments.cancel(options[selected], confirmed)
                    st.success(f"Cancelled {selected}")
                except AcademyError as e:
                    st.error(str(e) or messages.TRY_AGAIN)


def show_registrations():
    services = get_services()
    registrations = services["registrations"]

    try:
        all_tournaments = services["tournaments"].list()
    except AcademyError as e:
        logger.error("Could not load tournaments: %s", e)
        st.error(messages.TRY_AGAIN)
        return

    if not all_tournaments:
        st.info("No tournaments yet")
        return

    registrations.prefetch(t.id for t in all_tournaments)

    options = {f"{t.title} ({t.date})": t for t in all_tournaments}
    selected = st.selectbox("Tournament", list(options.keys()), key="registrations_tournament")
    tournament = options[selected]

    col1, col2 = st.columns([1, 1])
    with col1:
        if st.button("🔄 Refresh Registrations"):
            registrations.refresh(tournament.id)
            st.rerun()

    df = registrations.as_dataframe(tournament.id)
    st.metric("Teams Registered", len(df))
    st.dataframe(df, use_container_width=True, hide_index=True)

    with col2:
        try:
            filename, data = registrations.export_csv(tournament)
            st.download_button("📥 Export CSV", data=data, file_name=filename, mime="text/csv")
        except NothingToExport as e:
            st.info(str(e))

    if len(all_tournaments) > 1:
        counts = pd.DataFrame([
            {"Tournament": t.title, "Teams": len(registrations.get(t.id))}
            for t in all_tournaments
        ])
        fig = px.bar(counts, x="Tournament", y="Teams", title="Registrations by Tournament")
        st.plotly_chart(fig, use_container_width=True)


def show_announcements():
    services = get_services()
    announcements = services["announcements"]

    try:
        current = announcements.current()
    except AcademyError as e:
        logger.error("Could not read announcement: %s", e)
        current = None

    if current:
        expires = f"expires {current.expires_at:%d/%m/%Y %I:%M %p}" if current.expires_at else "until removed"
        st.info(f"📢 {current.message} ({expires})")
        if st.button("Remove Announcement"):
            try:
                announcements.clear()
                st.rerun()
            except AcademyError as e:
                logger.error("Clearing announcement failed: %s", e)
                st.error(messages.TRY_AGAIN)
    else:
        st.caption("No active announcement")

    with st.form("announcement_form", clear_on_submit=True):
        message = st.text_area("Announcement*")
        expiry_labels = {
            ExpiryPolicy.HOURS_24: "24 hours",
            ExpiryPolicy.HOURS_48: "48 hours",
            ExpiryPolicy.MANUAL: "Until removed",
        }
        expiry = st.radio("Show for", list(expiry_labels.keys()), format_func=expiry_labels.get,
                          horizontal=True)
        if st.form_submit_button("Publish", type="primary"):
            try:
                announcements.publish(message, expiry)
                st.success("Announcement published")
            except ValidationError as e:
                show_errors(e.messages)
            except AcademyError as e:
                logger.error("Publishing announcement failed: %s", e)
                st.error(messages.TRY_AGAIN)


def show_system():
    services = get_services()
    db_manager = services["db"]

    col1, col2 = st.columns(2)

    with col1:
        st.markdown("### Quick Actions")
        if st.button("🔄 Refresh All Data"):
            services["tournaments"].invalidate()
            services["registrations"].cache.clear()
            services["attendance"].players = []
            st.session_state.attendance_loaded = None
            st.success("Data refreshed!")
            st.rerun()

        if st.button("📊 Validate Data Integrity"):
            report = db_manager.validate_data_integrity()
            if report["valid"]:
                st.success("✅ Data integrity validation passed")
            for issue in report["issues"]:
                st.error(issue)

    with col2:
        st.markdown("### System Information")
        report = db_manager.validate_data_integrity()
        st.markdown("**Local Store Statistics:**")
        for stat, value in report["stats"].items():
            st.write(f"• {stat}: **{value}**")
        st.write(f"• Schema version: **{db_manager.get_schema_version()}**")
        st.write(f"• API: **{services['client'].base_url}**")

    st.markdown("### Recent Activity")
    audit = db_manager.get_audit_log(limit=50)
    if audit:
        audit_df = pd.DataFrame(audit)
        audit_df.columns = ['Entity', 'Record', 'Action', 'Details', 'By', 'When']
        st.dataframe(audit_df, use_container_width=True, hide_index=True)
    else:
        st.caption("No recorded actions yet")


# ================== PARENT DASHBOARD ==================

def show_parent_dashboard():
    if not require_role(Role.PARENT):
        return

    st.subheader("👪 Parent Dashboard")
    st.caption("Track your child's progress and schedule")
    services = get_services()
    roster = services["roster"]

    try:
        players = roster.list()
    except AcademyError as e:
        logger.error("Could not load players: %s", e)
        st.error(messages.TRY_AGAIN)
        return

    if not players:
        st.info("No players found")
        return

    options = {p.name: p for p in players}
    selected = st.selectbox("Player", list(options.keys()), key="parent_player")
    player = options[selected]

    show_player_profile(roster, player)

    performance = roster.performance(player.id)
    progress_df = pd.DataFrame({"Skill": [s.title() for s in performance], "Rating": list(performance.values())})
    fig = px.bar(progress_df, x="Rating", y="Skill", orientation="h", range_x=[0, 100],
                 title="Skill Progress")
    st.plotly_chart(fig, use_container_width=True)

    batch = site_content.batch_by_id("5day" if player.program == "5-Day" else "3day")
    st.markdown("### Upcoming Sessions")
    for entry in batch["schedule"]:
        st.write(f"• {entry['day']}: {', '.join(entry['times'])}")

    try:
        upcoming = services["tournaments"].upcoming()
    except AcademyError as e:
        logger.error("Could not load tournaments: %s", e)
        upcoming = []
    if upcoming:
        st.markdown("### Upcoming Tournaments")
        for tournament in upcoming:
            st.write(f"🏆 {tournament.title} · {tournament.date:%B %d, %Y} · {tournament.location}")

    st.caption(f"Last updated {datetime.now():%d/%m/%Y %I:%M %p}")


if __name__ == "__main__":
    main()
