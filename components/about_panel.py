"""
About panel: what a vernacular map is and how this one was collected.
"""
from typing import Callable

import streamlit as st

from utils.view_state import AboutClosed, AboutOpened, Event, ViewState

ABOUT_BUTTON_LABEL = "О карте"

ABOUT_HTML = """
<div class="about-content">
<p><strong>Вернакулярная карта города</strong> — это субъективная карта, отражающая восприятие, ассоциации и повседневный опыт местными жителями, а не официальную географию. Тем не менее, иногда они могут совпадать или быть производными друг от друга.</p>
<p>Для создания данной вернакулярной карты было инициировано несколько опросов жителей города о том, какие разговорные названия они употребляют в обычной жизни по отношению к разным объектам в городе.</p>
<p>Опросы происходили в telegram-каналах:<br>
– «Без поддержки министерства культуры»<br>
– «Пермь 36,6»<br>
– репост: Надежда Агишева</p>
<p>Информанты: журналист Иван Козлов («Новая вкладка»), активист Юрий Бобров.</p>
<p>Важно: на карте не все названия, некоторые слишком локальны или спорны.</p>
</div>
"""


def render_about_button(dispatch: Callable[[Event], None]) -> None:
    st.button(ABOUT_BUTTON_LABEL, key="about_open", on_click=dispatch, args=(AboutOpened(),))


def render_about_panel(state: ViewState, dispatch: Callable[[Event], None]) -> None:
    """Render the about panel when it is open."""
    if not state.show_about:
        return

    with st.container(border=True):
        _, close_col = st.columns([6, 1])
        with close_col:
            st.button("×", key="about_close", on_click=dispatch, args=(AboutClosed(),))
        st.markdown(ABOUT_HTML, unsafe_allow_html=True)
