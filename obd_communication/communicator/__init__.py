# obd_communication/communicator/__init__.py
