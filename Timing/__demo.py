import qdarktheme  # type: ignore
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QIntValidator
from PyQt5.QtWidgets import (
    QApplication,
    QCheckBox,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from . import __config as _c
from . import __debounce as _deb
from . import __log as _l

DEMO_DEFAULT_WAIT = 250


def countWords(source: QLineEdit) -> int:
    words = len(source.text().split())
    _l.info(f"counted {words} words")
    return words


### app
class App(QApplication):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)


# main window
class DemoWindow(QMainWindow):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.setWindowTitle("Debounce")
        self.calls = 0
        self.invocations = 0

        self.root = QWidget(self)
        self.setCentralWidget(self.root)
        self.rootLayout = QVBoxLayout(self.root)

        self.input = QLineEdit(self.root)
        self.input.setPlaceholderText("type here")
        self.input.textEdited.connect(self.onTextEdited)
        self.rootLayout.addWidget(self.input)

        self.form = QFormLayout()
        self.rootLayout.addLayout(self.form)
        defaults = _c.get().debounce
        self.waitInput = QLineEdit(str(defaults.wait or DEMO_DEFAULT_WAIT))
        self.waitInput.setValidator(QIntValidator(0, 60000, self))
        self.waitInput.editingFinished.connect(self.rebuild)
        self.form.addRow("Wait (ms)", self.waitInput)
        self.leadingCheck = QCheckBox()
        self.leadingCheck.setChecked(defaults.leading)
        self.leadingCheck.stateChanged.connect(lambda _: self.rebuild())
        self.form.addRow("Leading", self.leadingCheck)
        self.callsLabel = QLabel()
        self.form.addRow("Calls", self.callsLabel)
        self.invocationsLabel = QLabel()
        self.form.addRow("Invocations", self.invocationsLabel)
        self.resultLabel = QLabel()
        self.form.addRow("Words", self.resultLabel)

        self.buttons = QHBoxLayout()
        self.buttons.setAlignment(getattr(Qt, "AlignRight"))
        self.rootLayout.addLayout(self.buttons)
        self.cancelBtn = QPushButton("Cancel")
        self.cancelBtn.clicked.connect(self.onCancel)
        self.buttons.addWidget(self.cancelBtn)
        self.flushBtn = QPushButton("Flush")
        self.flushBtn.clicked.connect(self.onFlush)
        self.buttons.addWidget(self.flushBtn)
        self.saveBtn = QPushButton("Save defaults")
        self.saveBtn.clicked.connect(self.onSave)
        self.buttons.addWidget(self.saveBtn)

        self.debouncer: _deb.Debouncer | None = None
        self.rebuild()

    def wait(self) -> int:
        return int(self.waitInput.text() or 0)

    def rebuild(self) -> None:
        if self.debouncer is not None:
            self.debouncer.cancel()
        self.debouncer = _deb.debounce(
            self.wait(),
            self.countAndShow,
            {"leading": self.leadingCheck.isChecked()},
            self.input,
        )
        _l.debug(f"rebuilt {self.debouncer!r}")
        self.updateLabels()

    def countAndShow(self, source: QLineEdit) -> int:
        words = countWords(source)
        self.invocations += 1
        self.resultLabel.setText(str(words))
        self.updateLabels()
        return words

    def updateLabels(self) -> None:
        self.callsLabel.setText(str(self.calls))
        self.invocationsLabel.setText(str(self.invocations))

    def onTextEdited(self, _: str) -> None:
        self.calls += 1
        self.updateLabels()
        if self.debouncer is not None:
            self.debouncer()

    def onCancel(self) -> None:
        if self.debouncer is not None:
            self.debouncer.cancel()

    def onFlush(self) -> None:
        if self.debouncer is not None:
            _l.debug(f"flushed, {self.debouncer.flush()} words")

    def onSave(self) -> None:
        _c.setDebounceDefaults(self.wait(), self.leadingCheck.isChecked())
        _c.save()


def run() -> int:
    qdarktheme.enable_hi_dpi()
    app = App([])
    qdarktheme.setup_theme("auto")
    window = DemoWindow()
    window.show()
    _l.info("demo started")
    return app.exec_()
