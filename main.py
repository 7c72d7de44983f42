import ctypes
import logging
import tkinter as tk
from tkinter import font
from tkinter import ttk

from PIL import ImageTk

from interface.icones import draw_icon
from interface.simulador_gui import SimuladorGUI
from nucleo.automato import FA, FORMALISM_NAMES, PDA, TM
import sv_ttk

logger = logging.getLogger(__name__)


class MainMenu:
    def __init__(self, root):
        self.root = root
        self.root.title("Simulador de Autômatos")
        self.root.geometry("500x600")

        self.root.eval('tk::PlaceWindow . center')

        main_frame = tk.Frame(root, padx=20, pady=20)
        main_frame.pack(expand=True)

        self.load_logo()

        title_font = font.Font(family="Helvetica", size=26, weight="bold")
        subtitle_font = font.Font(family="Helvetica", size=16, weight="bold")

        title_canvas = tk.Canvas(main_frame, height=60, bg=main_frame.cget('bg'), highlightthickness=0)
        title_canvas.pack(pady=(0, 5))

        glow_color = "#ffc107"
        for i in range(1, 3):
            title_canvas.create_text(200 - i, 30 - i, text="Autômatos", font=title_font, fill=glow_color, anchor='center')
            title_canvas.create_text(200 + i, 30 + i, text="Autômatos", font=title_font, fill=glow_color, anchor='center')

        title_canvas.create_text(200, 30, text="Autômatos", font=title_font, fill="white", anchor='center')

        label = ttk.Label(main_frame, text="Selecione o Simulador", font=subtitle_font)
        label.pack(pady=(0, 25))

        for formalism in (FA, PDA, TM):
            self.create_menu_option(
                main_frame,
                text=f"Simulador de {FORMALISM_NAMES[formalism]}",
                command=lambda f=formalism: self.open_simulator_window(f)
            )

    def create_menu_option(self, parent, text, command):
        """Cria um botão customizado com efeito de hover."""
        NORMAL_BG = "#ffc107"
        HOVER_BG = "#007bff"
        NORMAL_FG = "#212529"
        HOVER_FG = "white"

        frame = tk.Frame(parent, bg=NORMAL_BG)
        frame.pack(pady=10, fill='x')

        label = tk.Label(frame, text=text, bg=NORMAL_BG, fg=NORMAL_FG,
                         font=("Helvetica", 12, "bold"), pady=25, cursor="hand2")
        label.pack(fill='x')

        frame.bind("<Enter>", lambda e: (frame.config(bg=HOVER_BG), label.config(bg=HOVER_BG, fg=HOVER_FG)))
        frame.bind("<Leave>", lambda e: (frame.config(bg=NORMAL_BG), label.config(bg=NORMAL_BG, fg=NORMAL_FG)))

        frame.bind("<Button-1>", lambda e: command())
        label.bind("<Button-1>", lambda e: command())

    def load_logo(self):
        """Desenha o logo no canto superior direito e usa-o como ícone."""
        self.logo_image = ImageTk.PhotoImage(draw_icon("logo", 80))
        self.icon_image = ImageTk.PhotoImage(draw_icon("logo", 32))
        try:
            self.root.iconphoto(True, self.icon_image)
        except tk.TclError as e:
            logger.warning("Não foi possível definir o ícone: %s", e)

        logo_label = tk.Label(self.root, image=self.logo_image, bg=self.root.cget('bg'))
        logo_label.place(relx=1.0, y=10, x=-10, anchor='ne')

    def open_simulator_window(self, formalism):
        """Oculta o menu principal e abre o simulador do formalismo escolhido.

        Ao fechar a janela do simulador, o menu principal é restaurado.
        """
        self.root.withdraw()

        window = tk.Toplevel(self.root)
        SimuladorGUI(window, formalism)

        def on_close():
            window.destroy()
            self.root.deiconify()

        window.protocol("WM_DELETE_WINDOW", on_close)


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s: %(message)s")
    root = tk.Tk()

    try:
        ctypes.windll.shcore.SetProcessDpiAwareness(1)
    except (AttributeError, OSError):
        pass

    sv_ttk.set_theme("light")

    MainMenu(root)
    root.mainloop()


if __name__ == "__main__":
    main()
