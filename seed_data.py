"""
seed_data.py
────────────
Creates the first admin account plus sample programs, rubric levels,
sustainability themes and hour targets for the current academic year.
Run ONCE after the migration (safe to re-run, existing rows are kept):

    python seed_data.py

Reads from .env - change SEED_ADMIN_* values there, or edit defaults below.
"""
import asyncio
import os
from dotenv import load_dotenv

load_dotenv()

# ── Change these in .env or edit here ────────────────────────────────
ADMIN_NAME     = os.getenv("SEED_ADMIN_NAME",     "Super Admin")
ADMIN_EMAIL    = os.getenv("SEED_ADMIN_EMAIL",    "admin@school.example")
ADMIN_PASSWORD = os.getenv("SEED_ADMIN_PASSWORD", "ChangeMe@2025")
# ─────────────────────────────────────────────────────────────────────

PROGRAMS = [
    {"code": "BUILD", "name": "Construction", "description": "Construction, architecture and project management"},
    {"code": "IT",    "name": "Computer Science", "description": "Software development, AI and cybersecurity"},
    {"code": "ELEC",  "name": "Electromechanics", "description": "Electronics, automation and mechanics"},
]

LEVELS = [
    {"name": "Level 1", "score_value": 1.0, "position": 1},
    {"name": "Level 2", "score_value": 2.0, "position": 2},
    {"name": "Level 3", "score_value": 3.0, "position": 3},
    {"name": "Level 4", "score_value": 4.0, "position": 4},
]

THEMES = {
    "BUILD": [
        ("SDG 7 - Affordable and clean energy", "⚡"),
        ("SDG 11 - Sustainable cities and communities", "🏙️"),
        ("Circular economy", "🔄"),
    ],
    "IT": [
        ("SDG 4 - Quality education", "📚"),
        ("Digital inclusion", "🌐"),
    ],
}

TARGETS = {
    "BUILD": dict(hours_level1=5.0, hours_level2=3.0, hours_level3=2.0, hours_level4=1.0, hours_sustainability=1.0),
    "IT":    dict(hours_level1=4.0, hours_level2=3.0, hours_level3=2.0, hours_level4=1.0, hours_sustainability=2.0),
}


async def seed():
    from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
    from sqlalchemy import select
    from app.controllers.hours_controller import current_academic_year
    from app.core.security import hash_password
    from app.models import Admin, Program, ProgramHourTarget, RubricLevel, SustainabilityTheme

    engine  = create_async_engine(os.environ["DATABASE_URL"], echo=False)
    Session = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    academic_year = current_academic_year()

    async with Session() as db:
        # ── Admin ────────────────────────────────────────────
        existing = (await db.execute(
            select(Admin).where(Admin.email == ADMIN_EMAIL.lower())
        )).scalar_one_or_none()

        if existing:
            print(f"⚠️  Admin already exists: {ADMIN_EMAIL}")
        else:
            db.add(Admin(
                name=ADMIN_NAME,
                email=ADMIN_EMAIL.lower(),
                password_hash=hash_password(ADMIN_PASSWORD),
            ))
            print(f"✅ Admin created: {ADMIN_EMAIL}")

        # ── Programs ─────────────────────────────────────────
        programs = {}
        for p in PROGRAMS:
            program = (await db.execute(
                select(Program).where(Program.code == p["code"])
            )).scalar_one_or_none()
            if not program:
                program = Program(**p)
                db.add(program)
                await db.flush()
            programs[p["code"]] = program
        print("✅ Programs:", ", ".join(sorted(programs)))

        # ── Rubric levels (shared) ───────────────────────────
        for lvl in LEVELS:
            found = (await db.execute(
                select(RubricLevel).where(
                    RubricLevel.program_id.is_(None),
                    RubricLevel.position == lvl["position"],
                )
            )).scalar_one_or_none()
            if not found:
                db.add(RubricLevel(**lvl))

        # ── Sustainability themes ────────────────────────────
        for code, themes in THEMES.items():
            for position, (name, icon) in enumerate(themes):
                found = (await db.execute(
                    select(SustainabilityTheme).where(
                        SustainabilityTheme.program_id == programs[code].id,
                        SustainabilityTheme.name == name,
                    )
                )).scalar_one_or_none()
                if not found:
                    db.add(SustainabilityTheme(
                        name=name,
                        icon=icon,
                        position=position,
                        program_id=programs[code].id,
                    ))

        # ── Hour targets for this academic year ──────────────
        for code, hours in TARGETS.items():
            found = (await db.execute(
                select(ProgramHourTarget).where(
                    ProgramHourTarget.program_id == programs[code].id,
                    ProgramHourTarget.academic_year == academic_year,
                )
            )).scalar_one_or_none()
            if not found:
                db.add(ProgramHourTarget(
                    program_id=programs[code].id,
                    academic_year=academic_year,
                    **hours,
                ))
        print(f"✅ Targets for {academic_year}")

        await db.commit()

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed())
