import pytest_asyncio
from datetime import date
from decimal import Decimal
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from src.depends import enable_sqlite_savepoints, get_session
from src.domain.organization import Client, Organization
from src.domain.phase import Phase, PhaseSubstage, ResourceAssignment
from src.domain.project import Project, ProjectChargeType, ProjectStage, ProjectStatus


@pytest_asyncio.fixture(scope="function")
async def engine():
    """In-memory SQLite engine; one shared connection per test"""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        echo=False,
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_savepoints(engine)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    """Create a new database session for each test"""
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_session):
    """Create test client with database session override"""
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def seeded(db_session):
    """
    Organization "Acme Architects" (Karnataka) with:
    - a same-state client and a 1,000,000 fee project in TENDER stage
    - an ON_HOLD project of the same organization
    - two phases with substages and resource assignments on the first project
    """
    organization = Organization(name="Acme Architects", state="Karnataka")
    db_session.add(organization)
    await db_session.flush()

    client = Client(organization_id=organization.id, name="Rao Developers", state="karnataka")
    db_session.add(client)
    await db_session.flush()

    project = Project(
        organization_id=organization.id,
        client_id=client.id,
        name="Lakeside Villa",
        total_fee=Decimal("1000000"),
        target_profit_margin=Decimal("0.20"),
        budget=Decimal("900000"),
        actual_cost=Decimal("100000"),
        charge_type=ProjectChargeType.REGULAR,
        stage=ProjectStage.TENDER,
        status=ProjectStatus.ACTIVE,
    )
    on_hold = Project(
        organization_id=organization.id,
        name="Old Office",
        total_fee=Decimal("200000"),
        charge_type=ProjectChargeType.OVERHEAD,
        stage=ProjectStage.CONCEPT,
        status=ProjectStatus.ON_HOLD,
    )
    db_session.add(project)
    db_session.add(on_hold)
    await db_session.flush()

    concept = Phase(project_id=project.id, name="Concept", sort_order=1, contract_amount=Decimal("400000"))
    drawings = Phase(project_id=project.id, name="Drawings", sort_order=2, contract_amount=Decimal("400000"))
    db_session.add(concept)
    db_session.add(drawings)
    await db_session.flush()

    db_session.add(PhaseSubstage(phase_id=concept.id, name="Site survey", sort_order=1, completed=True))
    db_session.add(PhaseSubstage(phase_id=concept.id, name="Client brief", sort_order=2, completed=False))
    db_session.add(
        ResourceAssignment(phase_id=concept.id, user_id=1, planned_hours=1000, burn_rate=Decimal("300"))
    )
    db_session.add(
        ResourceAssignment(phase_id=drawings.id, user_id=2, planned_hours=500, burn_rate=Decimal("200"))
    )
    await db_session.commit()

    return {
        "organization": organization,
        "client": client,
        "project": project,
        "on_hold_project": on_hold,
        "phases": [concept, drawings],
        "today": date.today(),
    }
