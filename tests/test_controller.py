import pytest

from plotterm.controller import InteractionController, InteractionState
from plotterm.events import Event, EventTypes, process
from plotterm.input import MouseButtons
from plotterm.session import PlotSession
from plotterm.transform import ViewTransform
from plotterm.values import Directions


@pytest.fixture()
def session(context):
    return PlotSession((800, 600), "x*x", context=context)


@pytest.fixture()
def redraws():
    return []


@pytest.fixture()
def controller(session, redraws, context):
    return InteractionController(session, lambda: redraws.append(1), context)


def test_drag_pans_by_pointer_delta(controller, session, redraws):
    viewport = session.viewport
    origin = session.transform.math_to_screen((0, 0), viewport)
    controller.pointer_down((100, 100))
    assert controller.state is InteractionState.PANNING
    controller.pointer_move((110, 95))
    controller.pointer_move((130, 100))
    moved = session.transform.math_to_screen((0, 0), viewport)
    assert moved.x == pytest.approx(origin.x + 30)
    assert moved.y == pytest.approx(origin.y)
    assert len(redraws) == 2


def test_moves_without_press_do_nothing(controller, session, redraws):
    controller.pointer_move((10, 10))
    controller.pointer_move((20, 20))
    assert session.transform == ViewTransform()
    assert not redraws


def test_release_ends_panning(controller, session):
    controller.pointer_down((100, 100))
    controller.pointer_up((120, 100))
    assert controller.state is InteractionState.IDLE
    controller.pointer_move((200, 200))
    assert session.transform == ViewTransform()


def test_only_primary_button_pans(controller):
    controller.pointer_down((100, 100), MouseButtons.Button3)
    assert not controller.panning


def test_wheel_up_zooms_in_around_cursor(controller, session, redraws):
    anchor = (200, 150)
    under_cursor = session.transform.screen_to_math(anchor, session.viewport)
    assert controller.wheel(anchor, -1) is True
    assert session.transform.scale == pytest.approx(44)
    projected = session.transform.math_to_screen(under_cursor, session.viewport)
    assert projected.x == pytest.approx(200)
    assert projected.y == pytest.approx(150)
    assert redraws == [1]


def test_wheel_down_zooms_out(controller, session):
    assert controller.wheel((400, 300), 3) is True
    assert session.transform.scale == pytest.approx(36)


def test_wheel_does_not_change_panning_state(controller):
    controller.pointer_down((10, 10))
    controller.wheel((10, 10), -1)
    assert controller.panning


def test_zoom_intensity_comes_from_context(controller, session, context):
    context.zoom_intensity = 0.5
    controller.wheel((400, 300), -1)
    assert session.transform.scale == pytest.approx(60)


def test_zoom_at_center_scenario(controller, session):
    controller.zoom_center(1.1)
    assert session.transform.scale == pytest.approx(44)
    assert session.transform.offset_x == 0
    assert session.transform.offset_y == 0


def test_keyboard_pan_moves_view_point(controller, session, context):
    controller.pan_by_keys(Directions.RIGHT)
    # the content moves left, so the view travels right
    origin = session.transform.math_to_screen((0, 0), session.viewport)
    assert origin == (400 - context.pan_step, 300)
    controller.pan_by_keys(Directions.UP)
    origin = session.transform.math_to_screen((0, 0), session.viewport)
    assert origin == (400 - context.pan_step, 300 + context.pan_step)


def test_reset_scenario(controller, session, redraws):
    controller.pointer_down((0, 0))
    controller.pointer_move((57, -13))
    controller.pointer_up()
    controller.wheel((10, 10), -1)
    controller.reset()
    assert session.transform == ViewTransform(40, 0, 0)
    assert len(redraws) == 3


def test_mouse_events_from_the_bus(controller, session):
    controller.subscribe()
    Event(EventTypes.MousePress, pos=(100, 100), buttons=MouseButtons.Button1)
    Event(EventTypes.MouseMove, pos=(140, 100), buttons=MouseButtons.Button1)
    Event(EventTypes.MouseRelease, pos=(140, 100), buttons=MouseButtons.Button1)
    Event(EventTypes.MouseWheel, pos=(400, 300), buttons=MouseButtons.MouseWheelUp, delta=-1)
    process()
    assert not controller.panning
    assert session.transform.scale == pytest.approx(44)
    assert session.transform.math_to_screen((0, 0), session.viewport).x == pytest.approx(444)
    controller.unsubscribe()
    Event(EventTypes.MouseWheel, pos=(400, 300), buttons=MouseButtons.MouseWheelUp, delta=-1)
    process()
    assert session.transform.scale == pytest.approx(44)


def test_position_map_converts_event_positions(session, context):
    controller = InteractionController(
        session, lambda: None, context, position_map=lambda cell: (cell[0] * 2, cell[1] * 4)
    )
    controller.handle_event(Event(EventTypes.MousePress, dispatch=False, pos=(5, 5), buttons=MouseButtons.Button1))
    assert controller.last_pos == (10, 20)
