import json
import logging
import math
import os
import tkinter as tk
from collections import defaultdict
from tkinter import filedialog, messagebox, ttk
from typing import Dict, Optional, Tuple

from interface.icones import load_icons
from nucleo.automato import FA, FORMALISM_NAMES, PDA, TM, Automato, AutomatoMalformado
from nucleo.exemplos import DEFAULT_EXAMPLE, EXEMPLOS, load_example
from nucleo.motor import EventoPasso, MotorExecucao, StatusExecucao
from nucleo.resolvedor import applicable

logger = logging.getLogger(__name__)

STATE_RADIUS = 24
LAYOUT_RADIUS = 180
FONT = ("Helvetica", 13)
ANIM_MS = 300
LOG_SIZE = 8

STATUS_TEXT = {
    StatusExecucao.PRONTO: "Pronto",
    StatusExecucao.EXECUTANDO: "Executando",
    StatusExecucao.ACEITO: "Aceito ✓",
    StatusExecucao.REJEITADO: "Rejeitado ✗",
    StatusExecucao.SEM_TRANSICAO: "Parada: sem transição",
}

STATUS_COLOR = {
    StatusExecucao.ACEITO: "#16a34a",
    StatusExecucao.REJEITADO: "#dc2626",
    StatusExecucao.SEM_TRANSICAO: "#d97706",
}


class Tooltip:
    """ Cria um tooltip (dica de ferramenta) para um widget. """
    def __init__(self, widget, text):
        self.widget = widget
        self.text = text
        self.tooltip_window = None
        self.widget.bind("<Enter>", self.show_tooltip, add='+')
        self.widget.bind("<Leave>", self.hide_tooltip, add='+')

    def show_tooltip(self, event):
        if not self.widget.winfo_exists(): return
        x = self.widget.winfo_pointerx() + 15
        y = self.widget.winfo_pointery() + 10

        self.tooltip_window = tw = tk.Toplevel(self.widget)
        tw.wm_overrideredirect(True)
        tw.wm_geometry(f"+{x}+{y}")
        label = tk.Label(tw, text=self.text, justify='left',
                         background="#ffffe0", relief='solid', borderwidth=1,
                         font=("tahoma", "8", "normal"))
        label.pack(ipadx=1)

    def hide_tooltip(self, event=None):
        tw = self.tooltip_window
        self.tooltip_window = None
        if tw:
            try: tw.destroy()
            except tk.TclError: pass


class SimuladorGUI:
    """
    Janela de simulação. Só consome o motor: desenha o autômato, destaca a
    transição aplicada por ANIM_MS e então confirma o passo ao motor, que
    agenda o próximo pela própria janela (after/after_cancel).
    """
    def __init__(self, root: tk.Toplevel, formalism: str = FA):
        self.root = root
        root.title(f"Simulador - {FORMALISM_NAMES[formalism]}")
        root.geometry("1100x750")

        self.icons = load_icons()
        self.positions: Dict[str, Tuple[float, float]] = {}
        self.motor: Optional[MotorExecucao] = None
        self.highlight: Optional[Tuple[str, str]] = None
        self._settle_job = None
        self.current_filepath = None

        self._build_toolbar()
        self._build_canvas()
        self._build_bottom_bar()
        self._build_statusbar()
        self.canvas.bind("<Configure>", lambda e: self.draw_all())

        automato, input_str = load_example(DEFAULT_EXAMPLE[formalism])
        self.install(automato, input_str)

    # Construção da interface

    def _build_toolbar(self):
        toolbar = tk.Frame(self.root)
        toolbar.pack(side=tk.TOP, fill=tk.X, padx=10, pady=(5, 10))

        file_menu = tk.Menu(toolbar, tearoff=0)
        file_menu.add_command(label="Abrir...", command=self.cmd_open)
        file_menu.add_command(label="Salvar Como...", command=self.cmd_save_as)
        file_button = ttk.Menubutton(toolbar, text="Arquivo")
        file_button["menu"] = file_menu
        file_button.pack(side=tk.LEFT, padx=2)

        examples_menu = tk.Menu(toolbar, tearoff=0)
        for name, data in EXEMPLOS.items():
            examples_menu.add_command(label=data["title"], command=lambda n=name: self.cmd_load_example(n))
        examples_button = ttk.Menubutton(toolbar, text="Exemplos")
        examples_button["menu"] = examples_menu
        examples_button.pack(side=tk.LEFT, padx=2)

        self.info_label = ttk.Label(toolbar, text="", font=("Helvetica", 11, "bold"))
        self.info_label.pack(side=tk.RIGHT, padx=10)

    def _build_canvas(self):
        body = tk.Frame(self.root)
        body.pack(fill=tk.BOTH, expand=True, padx=10)

        self.canvas = tk.Canvas(body, bg="white")
        self.canvas.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)

        side = tk.Frame(body, width=260)
        side.pack(side=tk.RIGHT, fill=tk.Y, padx=(10, 0))
        ttk.Label(side, text="Registro", font=("Helvetica", 10, "bold")).pack(anchor="w")
        self.log_list = tk.Listbox(side, height=LOG_SIZE, width=38, font=("Courier", 9))
        self.log_list.pack(fill=tk.X)
        self.metrics_label = ttk.Label(side, text="", font=("Helvetica", 10))
        self.metrics_label.pack(anchor="w", pady=(8, 0))
        self.available_label = ttk.Label(side, text="", font=("Helvetica", 10), wraplength=250)
        self.available_label.pack(anchor="w", pady=(8, 0))

    def _build_bottom_bar(self):
        bottom = tk.Frame(self.root)
        bottom.pack(side=tk.BOTTOM, fill=tk.X, padx=10, pady=10)

        ttk.Label(bottom, text="Entrada:", font=("Helvetica", 10)).pack(side=tk.LEFT)
        self.input_entry = ttk.Entry(bottom, width=30, font=("Helvetica", 11))
        self.input_entry.pack(side=tk.LEFT, padx=5, ipady=5)

        for icon, tip, command in (("executar", "Executar", self.cmd_run),
                                   ("passo", "Passo", self.cmd_step),
                                   ("pausar", "Pausar", self.cmd_pause),
                                   ("reiniciar", "Reiniciar", self.cmd_reset)):
            button = ttk.Button(bottom, image=self.icons[icon], command=command, style="Toolbutton")
            button.pack(side=tk.LEFT, padx=2)
            Tooltip(button, tip)

        self.memory_canvas = tk.Canvas(bottom, height=75, bg="#f0f0f0", highlightthickness=1,
                                       highlightbackground="#cccccc")
        self.memory_canvas.pack(side=tk.LEFT, fill=tk.X, expand=True, padx=10)

    def _build_statusbar(self):
        self.status = tk.Label(self.root, text="Pronto", anchor="w", relief=tk.SUNKEN, padx=5)
        self.status.pack(side=tk.BOTTOM, fill=tk.X)

    # Instalação do autômato

    def install(self, automato: Automato, input_str: str = "") -> bool:
        try:
            if self.motor is None:
                self.motor = MotorExecucao(automato, input_str, scheduler=self.root, manual_ack=True)
                self.motor.add_listener(self._on_step)
            else:
                self._cancel_settle()
                self.motor.load(automato, input_str)
        except AutomatoMalformado as e:
            messagebox.showerror("Autômato inválido", str(e), parent=self.root)
            return False

        self.root.title(f"Simulador - {FORMALISM_NAMES[automato.formalism]}")
        self.input_entry.delete(0, tk.END)
        self.input_entry.insert(0, input_str)
        self._layout_states()
        self._clear_log()
        self.log_event(f"Pronto no modo {automato.formalism.upper()} a partir de {automato.start_state}.")
        self.draw_all()
        return True

    def _layout_states(self):
        """ Distribui os estados em círculo. """
        states = self.motor.automato.states
        self.positions = {}
        for i, state in enumerate(states):
            angle = (i / len(states)) * math.pi * 2
            self.positions[state.name] = (LAYOUT_RADIUS * math.cos(angle), LAYOUT_RADIUS * math.sin(angle))

    # Comandos

    def cmd_load_example(self, name: str):
        automato, input_str = load_example(name)
        if self.install(automato, input_str):
            self.status.config(text=f"Exemplo '{EXEMPLOS[name]['title']}' carregado.")

    def cmd_open(self):
        path = filedialog.askopenfilename(defaultextension=".json", filetypes=[("Autômatos", "*.json"), ("All", "*.*")])
        if not path: return
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            automato = Automato.from_dict(data)
        except (OSError, ValueError, KeyError) as e:
            messagebox.showerror("Erro Abrir", f"Falha:\n{e}", parent=self.root)
            return
        if self.install(automato, data.get("input", "")):
            self.current_filepath = path
            self.status.config(text=f"Arquivo '{os.path.basename(path)}' carregado.")

    def cmd_save_as(self):
        path = filedialog.asksaveasfilename(defaultextension=".json", filetypes=[("Autômatos", "*.json"), ("All", "*.*")])
        if not path: return
        data = self.motor.automato.to_dict()
        data["input"] = self.input_entry.get()
        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
        except OSError as e:
            messagebox.showerror("Erro Salvar", f"Falha:\n{e}", parent=self.root)
            return
        self.current_filepath = path
        self.status.config(text=f"Salvo em '{os.path.basename(path)}'.")

    def cmd_run(self):
        self._restart(self.input_entry.get())
        self.log_event(f'Execução iniciada com entrada "{self.motor.input_str}".')
        self.motor.run()
        self.draw_all()

    def cmd_step(self):
        if self.motor.step_in_flight:
            return
        if self.motor.status.is_terminal or self.motor.input_str != self.input_entry.get():
            self._restart(self.input_entry.get())
        self.log_event(f"Passo manual {self.motor.steps + 1}.")
        self.motor.step()
        self.draw_all()

    def cmd_pause(self):
        if self.motor.running:
            self.motor.pause()
            self.status.config(text="Pausado.")

    def cmd_reset(self):
        self._restart(self.input_entry.get())
        self._clear_log()
        self.log_event(f"Pronto no modo {self.motor.automato.formalism.upper()}.")
        self.status.config(text="Simulação reiniciada.")
        self.draw_all()

    def _restart(self, input_str: str):
        self._cancel_settle()
        self.motor.reset(input_str)

    # Eventos do motor

    def _on_step(self, evento: EventoPasso):
        t = evento.transition
        if t is None:
            kind = "accept" if evento.status == StatusExecucao.ACEITO else "reject"
            self.log_event(f"{STATUS_TEXT[evento.status]} em {evento.snapshot.state}.", kind)
            self.draw_all()
            return

        self.highlight = (t.source, t.target)
        self.log_event(f"{t.source} → {t.target} usando {t.label}.")
        self.draw_all()
        self._settle_job = self.root.after(ANIM_MS, lambda: self._settle(evento.generation))

    def _settle(self, generation: int):
        self._settle_job = None
        self.highlight = None
        self.motor.acknowledge_step(generation)
        self.draw_all()

    def _cancel_settle(self):
        if self._settle_job is not None:
            self.root.after_cancel(self._settle_job)
            self._settle_job = None
        self.highlight = None

    def log_event(self, message: str, kind: str = "info"):
        logger.debug(message)
        self.log_list.insert(0, message)
        color = {"accept": "#16a34a", "reject": "#dc2626"}.get(kind)
        if color:
            self.log_list.itemconfig(0, foreground=color)
        while self.log_list.size() > LOG_SIZE:
            self.log_list.delete(tk.END)

    def _clear_log(self):
        self.log_list.delete(0, tk.END)

    # Desenho

    def _to_view(self, x, y):
        try:
            w, h = self.canvas.winfo_width(), self.canvas.winfo_height()
        except tk.TclError:
            w, h = 800, 600
        return x + w / 2, y + h / 2

    def draw_all(self):
        if self.motor is None: return
        self.canvas.delete("all")
        self._draw_edges_and_states()
        self._draw_memory()
        self._update_side_panel()

    def _update_side_panel(self):
        motor = self.motor
        automato = motor.automato
        self.info_label.config(
            text=f"{FORMALISM_NAMES[automato.formalism]} com {len(automato.states)} estados "
                 f"({len(automato.final_states)} finais) e {len(automato.transitions)} transições")

        if automato.formalism == TM:
            consumed = f"Cabeça: {motor.configuration.head}"
        else:
            consumed = f"Consumido: {min(motor.consumed, len(motor.input_str))}/{len(motor.input_str)}"
        self.metrics_label.config(text=f"Passos: {motor.steps}    {consumed}")

        available = ", ".join(f"{t.label} → {t.target}" for t in applicable(automato, motor.configuration))
        self.available_label.config(text=f"Transições: {available or 'nenhuma'}")

        status = motor.status
        text = STATUS_TEXT[status]
        if status == StatusExecucao.EXECUTANDO and not motor.running:
            text = f"Passo {motor.steps}"
        self.status.config(text=text, fg=STATUS_COLOR.get(status, "black"))

    def _draw_edges_and_states(self):
        automato = self.motor.automato
        active_state = self.motor.configuration.state
        rad = STATE_RADIUS

        agg = defaultdict(list)
        for t in automato.transitions:
            agg[(t.source, t.target)].append(str(t.label))

        for (src, dst), labels in agg.items():
            x1, y1 = self._to_view(*self.positions[src]); x2, y2 = self._to_view(*self.positions[dst])
            active = self.highlight == (src, dst)
            clr, w = ("#0284c7", 3) if active else ("black", 1.5)

            if src == dst:
                loop_rx, loop_ry = rad*1.2, rad*1.6
                cx, cy = x1, y1 - loop_ry*0.8
                p1=(x1-rad*0.5, y1-rad*0.8); c1=(cx-loop_rx, cy-loop_ry); c2=(cx+loop_rx, cy-loop_ry); p2=(x1+rad*0.5, y1-rad*0.8)
                self.canvas.create_line(p1, c1, c2, p2, smooth=True, arrow=tk.LAST, width=w, fill=clr)
                tx, ty = cx, cy - loop_ry*0.9 - 6 * len(labels)
            else:
                dx, dy = x2 - x1, y2 - y1; dist = math.hypot(dx, dy) or 1; ux, uy = dx/dist, dy/dist
                bend = 0.25 if (dst, src) in agg else 0
                sx, sy = x1+ux*rad, y1+uy*rad; ex, ey = x2-ux*rad, y2-uy*rad
                mx, my = (sx + ex)/2, (sy + ey)/2; cx_ctrl, cy_ctrl = mx - uy*dist*bend, my + ux*dist*bend
                tx, ty = cx_ctrl - uy * 15, cy_ctrl + ux * 15
                self.canvas.create_line(sx, sy, cx_ctrl, cy_ctrl, ex, ey, smooth=True, arrow=tk.LAST, width=w, fill=clr)
            self.canvas.create_text(tx, ty, text="\n".join(labels), fill=clr, justify=tk.CENTER, font=("Helvetica", 11))

        for state in automato.states:
            x, y = self._to_view(*self.positions[state.name])
            is_active = state.name == active_state
            fill, outl, wd = ("#e0f2fe", "#0284c7", 3) if is_active else ("white", "black", 2)
            if is_active and self.motor.status in STATUS_COLOR:
                outl = STATUS_COLOR[self.motor.status]
            self.canvas.create_oval(x-rad, y-rad, x+rad, y+rad, fill=fill, outline=outl, width=wd)
            if state.final:
                self.canvas.create_oval(x-(rad-4), y-(rad-4), x+(rad-4), y+(rad-4), outline="black", width=1)
            self.canvas.create_text(x, y, text=state.name, font=FONT)
            if state.initial:
                self.canvas.create_line(x-rad*2, y, x-rad, y, arrow=tk.LAST, width=2)

    def _draw_memory(self):
        """ Desenha pilha (AP), fita (MT) ou entrada restante (AF). """
        canvas = self.memory_canvas; canvas.delete("all")
        snapshot = self.motor.snapshot()
        formalism = self.motor.automato.formalism
        y_label, y_base = 3, 63
        cell_w, cell_h = 30, 30
        x0 = 10

        if formalism == PDA:
            canvas.create_text(x0, y_label, text="Pilha:", anchor="nw", font=("Helvetica", 10, "bold"))
            stack_draw = list(snapshot.stack)[-12:]
            for i, sym in enumerate(stack_draw):
                x1 = x0 + i * cell_w
                fill = "#e0f2fe" if i == len(stack_draw)-1 else "#ffffff"
                canvas.create_rectangle(x1, y_base - cell_h, x1 + cell_w, y_base, fill=fill, outline="#7dd3fc")
                canvas.create_text(x1 + cell_w/2, y_base - cell_h/2, text=sym, font=("Courier", 12))
            if not stack_draw:
                canvas.create_text(x0 + cell_w/2, y_base - cell_h/2, text="[vazia]", anchor="w", font=("Courier", 10), fill="#888")
            x0 += 12 * cell_w + 30

        if formalism == TM:
            canvas.create_text(x0, y_label, text="Fita:", anchor="nw", font=("Helvetica", 10, "bold"))
            cells = list(snapshot.tape) or ["_"]
            if snapshot.head >= len(cells):
                cells.append("_")
            head = snapshot.head
        else:
            canvas.create_text(x0, y_label, text="Entrada Restante:", anchor="nw", font=("Helvetica", 10, "bold"))
            cells = list(self.motor.input_str[snapshot.cursor:]) or ["ε"]
            head = 0

        for i, sym in enumerate(cells[:24]):
            x1 = x0 + i * cell_w
            canvas.create_rectangle(x1, y_base - cell_h, x1 + cell_w, y_base, fill="#f1f5f9", outline="#cbd5e1")
            canvas.create_text(x1 + cell_w/2, y_base - cell_h/2, text=sym, font=("Courier", 12))
        head_x = x0 + head * cell_w + cell_w / 2
        canvas.create_polygon(head_x, y_base - cell_h - 2, head_x - 5, y_base - cell_h - 12, head_x + 5, y_base - cell_h - 12, fill="black")
