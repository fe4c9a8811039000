"""Command, response and notification codes of the camera BLE/WiFi protocol.

The same numeric codes are used over BLE (direct camera control) and over the
WiFi TCP protocol.  Response packets carry HTTP-like status codes
(200 OK, 400 bad request, 500 error, 501 not implemented).
"""

from __future__ import annotations

from enum import IntEnum

__all__ = ["MessageCode", "code_name"]

_MAX_CODE = 0xFFFF


class MessageCode(IntEnum):
    """A 16-bit protocol message code.

    Several names are aliases of the same numeric value: legacy names, names
    observed on GO 3 firmware and the official enum names share codes.
    """

    # Phone -> camera commands.
    BEGIN = 0
    START_LIVE_STREAM = 1
    STOP_LIVE_STREAM = 2
    TAKE_PICTURE = 3
    START_CAPTURE = 4
    STOP_CAPTURE = 5
    CANCEL_CAPTURE = 6
    SET_OPTIONS = 7
    GET_OPTIONS = 8
    SET_PHOTOGRAPHY_OPTIONS = 9
    GET_PHOTOGRAPHY_OPTIONS = 10
    GET_FILE_EXTRA = 11
    DELETE_FILES = 12
    GET_FILE_LIST = 13
    TAKE_PICTURE_WITHOUT_STORING = 14
    GET_CURRENT_CAPTURE_STATUS = 15
    SET_FILE_EXTRA = 16
    GET_TIMELAPSE_OPTIONS = 17
    SET_TIMELAPSE_OPTIONS = 18
    GET_GYRO = 19
    START_TIMELAPSE = 22
    STOP_TIMELAPSE = 23
    ERASE_SD_CARD = 24
    CALIBRATE_GYRO = 25
    SCAN_BT_PERIPHERAL = 26
    CONNECT_TO_BT_PERIPHERAL = 27
    DISCONNECT_BT_PERIPHERAL = 28
    GET_CONNECTED_BT_PERIPHERALS = 29
    GET_MINI_THUMBNAIL = 30
    TEST_SD_CARD_SPEED = 31
    REBOOT_CAMERA = 32
    OPEN_CAMERA_WIFI = 33
    CLOSE_CAMERA_WIFI = 34
    OPEN_IPERF = 35
    CLOSE_IPERF = 36
    GET_IPERF_AVERAGE = 37
    GET_FILE_INFO_LIST = 38
    CHECK_AUTHORIZATION = 39
    CANCEL_AUTHORIZATION = 40
    START_BULLET_TIME_CAPTURE = 41
    SET_SUBMODE_OPTIONS = 42
    GET_SUBMODE_OPTIONS = 43
    STOP_BULLET_TIME_CAPTURE = 48
    OPEN_OLED = 49
    CLOSE_OLED = 50
    START_HDR_CAPTURE = 51
    STOP_HDR_CAPTURE = 52
    UPLOAD_GPS = 53
    SET_SYNC_CAPTURE_MODE = 54
    GET_SYNC_CAPTURE_MODE = 55
    SET_STANDBY_MODE = 56
    RESTORE_FACTORY_SETTINGS = 57
    SET_TEMP_OPTIONS_SWITCH = 58
    GET_TEMP_OPTIONS_SWITCH = 59
    SET_KEY_TIME_POINT = 60
    START_TIMESHIFT_CAPTURE = 61
    STOP_TIMESHIFT_CAPTURE = 62
    SET_FLOWSTATE_ENABLE = 63
    GET_FLOWSTATE_ENABLE = 64
    SET_ACTIVE_SENSOR = 65
    GET_ACTIVE_SENSOR = 66
    SET_MULTI_PHOTOGRAPHY_OPTIONS = 67
    GET_MULTI_PHOTOGRAPHY_OPTIONS = 68
    GET_RECORDING_FILE = 71
    PREPARE_GET_FILE_PACKAGE = 83
    GET_FILE_PACKAGE_FINISH = 84
    SET_WIFI_SEIZE_ENABLE = 85
    REQUEST_AUTHORIZATION = 86
    CANCEL_REQUEST_AUTHORIZATION = 87
    SET_BUTTON_PRESS_PARAM = 103
    GET_BUTTON_PRESS_PARAM = 104
    IFRAME_REQUEST = 105
    SET_WIFI_CONNECTION_INFO = 112
    GET_WIFI_CONNECTION_INFO = 113
    SET_ACCESS_CAMERA_FILE_STATE = 118
    SET_APP_ID = 120
    RESET_WIFI = 125
    STOP_USB_CARD_BACKUP = 133
    SET_CAMERA_LIVE_INFO = 135
    GET_CAMERA_LIVE_INFO = 136
    START_CAMERA_LIVE = 137
    STOP_CAMERA_LIVE = 144
    START_CAMERA_LIVE_RECORD = 145
    STOP_CAMERA_LIVE_RECORD = 146
    SET_WIFI_MODE = 147
    GET_WIFI_SCAN_LIST = 148
    GET_CONNECTED_WIFI_LIST = 149
    GET_WIFI_MODE = 150
    PREPARE_GET_FILE_SYNC_PACKAGE = 151
    GET_FILE_PACKAGE_SYNC_FINISH = 152
    DARK_EIS_STATUS = 157
    GET_CLOUD_STORAGE_UPLOAD_STATUS = 160
    SET_CLOUD_STORAGE_UPLOAD_STATUS = 161
    GET_CLOUD_STORAGE_BIND_STATUS = 162
    SET_CLOUD_STORAGE_BIND_STATUS = 163
    PAUSE_RECORDING = 164
    NOTIFY_OTA_ERROR = 167
    GET_DOWNLOAD_FILE_LIST = 172
    DOWNLOAD_INFO = 173
    DEL_WIFI_HISTORY_INFO = 175
    SET_FAVORITE = 176
    QUICKREADER_GET_STATUS = 182
    ADD_DOWNLOAD_LIST_RESULT_SYNC = 190
    GET_EDIT_INFO_LIST = 201

    # Response status codes.
    RESPONSE_OK = 0x00C8
    RESPONSE_BAD_REQUEST = 0x0190
    RESPONSE_ERROR = 0x01F4
    RESPONSE_NOT_IMPLEMENTED = 0x01F5

    # Phone -> camera request range.
    PHONE_REQUEST_BEGIN = 0x1000

    # Camera -> phone notifications.
    NOTIFY_FIRMWARE_UPGRADE_COMPLETE = 8193
    NOTIFY_CAPTURE_AUTO_SPLIT = 8194
    NOTIFY_BATTERY_UPDATE = 8195
    NOTIFY_BATTERY_LOW = 8196
    NOTIFY_SHUTDOWN = 8197
    NOTIFY_STORAGE_UPDATE = 8198
    NOTIFY_STORAGE_FULL = 8199
    NOTIFY_KEY_PRESSED = 8200
    NOTIFY_CAPTURE_STOPPED = 8201
    NOTIFY_TAKE_PICTURE_STATE_UPDATE = 8202
    NOTIFY_DELETE_FILES_PROGRESS = 8203
    NOTIFY_PHONE_INSERT = 8204
    NOTIFY_BT_DISCOVER_PERIPHERAL = 8205
    NOTIFY_BT_CONNECTED_TO_PERIPHERAL = 8206
    NOTIFY_BT_DISCONNECTED_PERIPHERAL = 8207
    NOTIFY_CURRENT_CAPTURE_STATUS = 8208
    NOTIFY_AUTHORIZATION_RESULT = 8209
    NOTIFY_TIMELAPSE_STATUS_UPDATE = 8210
    NOTIFY_SYNC_CAPTURE_MODE_UPDATE = 8211
    NOTIFY_SYNC_CAPTURE_BUTTON_TRIGGER = 8212
    NOTIFY_BT_REMOTE_VER_UPDATED = 8213
    NOTIFY_CAM_TEMPERATURE_VALUE = 8214
    NOTIFY_CAM_WIFI_START = 8215
    NOTIFY_CAM_BT_MSG_ANALYZE_FAILED = 8216
    NOTIFY_CHARGE_BOX_BATTERY_UPDATE = 8217
    NOTIFY_LIVEVIEW_BEGIN_ROTATE = 8219
    NOTIFY_EXPOSURE_UPDATE = 8220
    NOTIFY_CHARGE_BOX_CONNECT_STATUS = 8222
    NOTIFY_WIFI_STATUS = 8232
    NOTIFY_UPDATE_LIVE_STREAM_PARAMS = 8234
    NOTIFY_FIRMWARE_UPGRADE_STATUS_TO_APP = 8238
    NOTIFY_USB_CARD_STATUS = 8242
    NOTIFY_CAMERA_LIVE_STATUS = 8246
    NOTIFY_WIFI_MODE_CHANGE = 8247
    NOTIFY_DATA_EXPORT_STATUS = 8248
    NOTIFY_WIFI_SCAN_LIST_CHANGED = 8249
    NOTIFY_DETECTED_FACE = 8250
    NOTIFY_DARK_EIS_STATUS = 8252
    NOTIFY_CLOUD_STORAGE_BIND_STATUS = 8255
    NOTIFY_SUPPORT_TAKE_PHOTO_ON_REC_STATUS = 8256
    NOTIFY_NEED_DOWNLOAD_FILE = 8259
    NOTIFY_INTERVAL_REC_INFO = 8270
    NOTIFY_CAM_SUBMODE_CHANGE = 8275
    NOTIFY_DELETE_FILE_RESULT = 8279
    NOTIFY_FAVORITE_CHANGE_STATUS = 8284
    NOTIFY_USER_TAKEOVER = 8285

    # Factory command range.
    FACTORY_BEGIN = 0x3000

    # Backward-compatible aliases (verified on GO 3).
    TAKE_PHOTO = 3
    START_RECORDING = 4
    STOP_RECORDING = 5
    SET_HIGHLIGHT = 60
    SET_GPS = 53
    SET_HDR = 51
    SET_TIMELAPSE = 22
    # GO 3 answers CALIBRATE_GYRO with battery data.
    GO3_GET_BATTERY = 25

    # Notification codes observed on GO 3 traffic.
    GO2_NOTIFY_CAPTURE_STATE = 0x2006
    GO2_NOTIFY_DEVICE_INFO = 0x200A
    GO2_NOTIFY_STORAGE_STATE = 0x2010
    GO2_NOTIFY_BATTERY_STATE = 0x2021
    GO2_NOTIFY_POWER_STATE = 0x2025
    GO2_NOTIFY_PERIODIC_STATUS = 0x2026

    # Legacy names sharing official codes; firmware may interpret them differently.
    SET_CAPTURE_MODE = 0x0C
    GET_STORAGE_INFO = 0x10
    GET_BATTERY_INFO = 0x12
    GET_DEVICE_INFO = 0x28
    GET_CAMERA_STATE = 0x3D
    POWER_OFF = 0x37

    def __str__(self) -> str:
        return code_name(self.value)


_C = MessageCode

_DISPLAY_NAMES: dict[int, str] = {
    _C.BEGIN: "Begin",
    _C.START_LIVE_STREAM: "StartLiveStream",
    _C.STOP_LIVE_STREAM: "StopLiveStream",
    _C.TAKE_PICTURE: "TakePicture",
    _C.START_CAPTURE: "StartCapture",
    _C.STOP_CAPTURE: "StopCapture",
    _C.CANCEL_CAPTURE: "CancelCapture",
    _C.SET_OPTIONS: "SetOptions",
    _C.GET_OPTIONS: "GetOptions",
    _C.SET_PHOTOGRAPHY_OPTIONS: "SetPhotographyOptions",
    _C.GET_PHOTOGRAPHY_OPTIONS: "GetPhotographyOptions",
    _C.GET_FILE_EXTRA: "GetFileExtra",
    _C.DELETE_FILES: "DeleteFiles",
    _C.GET_FILE_LIST: "GetFileList",
    _C.TAKE_PICTURE_WITHOUT_STORING: "TakePictureWithoutStoring",
    _C.GET_CURRENT_CAPTURE_STATUS: "GetCurrentCaptureStatus",
    _C.SET_FILE_EXTRA: "SetFileExtra",
    _C.GET_TIMELAPSE_OPTIONS: "GetTimelapseOptions",
    _C.SET_TIMELAPSE_OPTIONS: "SetTimelapseOptions",
    _C.GET_GYRO: "GetGyro",
    _C.START_TIMELAPSE: "StartTimelapse",
    _C.STOP_TIMELAPSE: "StopTimelapse",
    _C.ERASE_SD_CARD: "EraseSDCard",
    _C.CALIBRATE_GYRO: "CalibrateGyro/Go3:GetBattery",
    _C.SCAN_BT_PERIPHERAL: "ScanBTPeripheral",
    _C.CONNECT_TO_BT_PERIPHERAL: "ConnectToBTPeripheral",
    _C.DISCONNECT_BT_PERIPHERAL: "DisconnectBTPeripheral",
    _C.GET_CONNECTED_BT_PERIPHERALS: "GetConnectedBTPeripherals",
    _C.GET_MINI_THUMBNAIL: "GetMiniThumbnail",
    _C.TEST_SD_CARD_SPEED: "TestSDCardSpeed",
    _C.REBOOT_CAMERA: "RebootCamera",
    _C.OPEN_CAMERA_WIFI: "OpenCameraWifi",
    _C.CLOSE_CAMERA_WIFI: "CloseCameraWifi",
    _C.OPEN_IPERF: "OpenIperf",
    _C.CLOSE_IPERF: "CloseIperf",
    _C.GET_IPERF_AVERAGE: "GetIperfAverage",
    _C.GET_FILE_INFO_LIST: "GetFileInfoList",
    _C.CHECK_AUTHORIZATION: "CheckAuthorization",
    _C.CANCEL_AUTHORIZATION: "CancelAuthorization",
    _C.START_BULLET_TIME_CAPTURE: "StartBulletTimeCapture",
    _C.SET_SUBMODE_OPTIONS: "SetSubmodeOptions",
    _C.GET_SUBMODE_OPTIONS: "GetSubmodeOptions",
    _C.STOP_BULLET_TIME_CAPTURE: "StopBulletTimeCapture",
    _C.OPEN_OLED: "OpenOLED",
    _C.CLOSE_OLED: "CloseOLED",
    _C.START_HDR_CAPTURE: "StartHDRCapture",
    _C.STOP_HDR_CAPTURE: "StopHDRCapture",
    _C.UPLOAD_GPS: "UploadGPS",
    _C.SET_SYNC_CAPTURE_MODE: "SetSyncCaptureMode",
    _C.GET_SYNC_CAPTURE_MODE: "GetSyncCaptureMode",
    _C.SET_STANDBY_MODE: "SetStandbyMode",
    _C.RESTORE_FACTORY_SETTINGS: "RestoreFactorySettings",
    _C.SET_TEMP_OPTIONS_SWITCH: "SetTempOptionsSwitch",
    _C.GET_TEMP_OPTIONS_SWITCH: "GetTempOptionsSwitch",
    _C.SET_KEY_TIME_POINT: "SetKeyTimePoint",
    _C.START_TIMESHIFT_CAPTURE: "StartTimeshiftCapture",
    _C.STOP_TIMESHIFT_CAPTURE: "StopTimeshiftCapture",
    _C.SET_FLOWSTATE_ENABLE: "SetFlowstateEnable",
    _C.GET_FLOWSTATE_ENABLE: "GetFlowstateEnable",
    _C.SET_ACTIVE_SENSOR: "SetActiveSensor",
    _C.GET_ACTIVE_SENSOR: "GetActiveSensor",
    _C.SET_MULTI_PHOTOGRAPHY_OPTIONS: "SetMultiPhotographyOptions",
    _C.GET_MULTI_PHOTOGRAPHY_OPTIONS: "GetMultiPhotographyOptions",
    _C.GET_RECORDING_FILE: "GetRecordingFile",
    _C.PREPARE_GET_FILE_PACKAGE: "PrepareGetFilePackage",
    _C.GET_FILE_PACKAGE_FINISH: "GetFilePackageFinish",
    _C.SET_WIFI_SEIZE_ENABLE: "SetWifiSeizeEnable",
    _C.REQUEST_AUTHORIZATION: "RequestAuthorization",
    _C.CANCEL_REQUEST_AUTHORIZATION: "CancelRequestAuthorization",
    _C.SET_BUTTON_PRESS_PARAM: "SetButtonPressParam",
    _C.GET_BUTTON_PRESS_PARAM: "GetButtonPressParam",
    _C.IFRAME_REQUEST: "IFrameRequest",
    _C.SET_WIFI_CONNECTION_INFO: "SetWifiConnectionInfo",
    _C.GET_WIFI_CONNECTION_INFO: "GetWifiConnectionInfo",
    _C.SET_ACCESS_CAMERA_FILE_STATE: "SetAccessCameraFileState",
    _C.SET_APP_ID: "SetAppID",
    _C.RESET_WIFI: "ResetWifi",
    _C.STOP_USB_CARD_BACKUP: "StopUSBCardBackup",
    _C.SET_CAMERA_LIVE_INFO: "SetCameraLiveInfo",
    _C.GET_CAMERA_LIVE_INFO: "GetCameraLiveInfo",
    _C.START_CAMERA_LIVE: "StartCameraLive",
    _C.STOP_CAMERA_LIVE: "StopCameraLive",
    _C.START_CAMERA_LIVE_RECORD: "StartCameraLiveRecord",
    _C.STOP_CAMERA_LIVE_RECORD: "StopCameraLiveRecord",
    _C.SET_WIFI_MODE: "SetWifiMode",
    _C.GET_WIFI_SCAN_LIST: "GetWifiScanList",
    _C.GET_CONNECTED_WIFI_LIST: "GetConnectedWifiList",
    _C.GET_WIFI_MODE: "GetWifiMode",
    _C.PREPARE_GET_FILE_SYNC_PACKAGE: "PrepareGetFileSyncPackage",
    _C.GET_FILE_PACKAGE_SYNC_FINISH: "GetFilePackageSyncFinish",
    _C.DARK_EIS_STATUS: "DarkEISStatus",
    _C.GET_CLOUD_STORAGE_UPLOAD_STATUS: "GetCloudStorageUploadStatus",
    _C.SET_CLOUD_STORAGE_UPLOAD_STATUS: "SetCloudStorageUploadStatus",
    _C.GET_CLOUD_STORAGE_BIND_STATUS: "GetCloudStorageBindStatus",
    _C.SET_CLOUD_STORAGE_BIND_STATUS: "SetCloudStorageBindStatus",
    _C.PAUSE_RECORDING: "PauseRecording",
    _C.NOTIFY_OTA_ERROR: "NotifyOTAError",
    _C.GET_DOWNLOAD_FILE_LIST: "GetDownloadFileList",
    _C.DOWNLOAD_INFO: "DownloadInfo",
    _C.DEL_WIFI_HISTORY_INFO: "DelWifiHistoryInfo",
    _C.SET_FAVORITE: "SetFavorite",
    _C.QUICKREADER_GET_STATUS: "QuickreaderGetStatus",
    _C.ADD_DOWNLOAD_LIST_RESULT_SYNC: "AddDownloadListResultSync",
    _C.GET_EDIT_INFO_LIST: "GetEditInfoList",
    # Notifications.
    _C.NOTIFY_FIRMWARE_UPGRADE_COMPLETE: "Notify:FirmwareUpgradeComplete",
    _C.NOTIFY_CAPTURE_AUTO_SPLIT: "Notify:CaptureAutoSplit",
    _C.NOTIFY_BATTERY_UPDATE: "Notify:BatteryUpdate",
    _C.NOTIFY_BATTERY_LOW: "Notify:BatteryLow",
    _C.NOTIFY_SHUTDOWN: "Notify:Shutdown",
    _C.NOTIFY_STORAGE_UPDATE: "Notify:StorageUpdate",
    _C.NOTIFY_STORAGE_FULL: "Notify:StorageFull",
    _C.NOTIFY_KEY_PRESSED: "Notify:KeyPressed",
    _C.NOTIFY_CAPTURE_STOPPED: "Notify:CaptureStopped",
    _C.NOTIFY_TAKE_PICTURE_STATE_UPDATE: "Notify:TakePictureStateUpdate",
    _C.NOTIFY_DELETE_FILES_PROGRESS: "Notify:DeleteFilesProgress",
    _C.NOTIFY_PHONE_INSERT: "Notify:PhoneInsert",
    _C.NOTIFY_BT_DISCOVER_PERIPHERAL: "Notify:BTDiscoverPeripheral",
    _C.NOTIFY_BT_CONNECTED_TO_PERIPHERAL: "Notify:BTConnectedToPeripheral",
    _C.NOTIFY_BT_DISCONNECTED_PERIPHERAL: "Notify:BTDisconnectedPeripheral",
    _C.NOTIFY_CURRENT_CAPTURE_STATUS: "Notify:CurrentCaptureStatus",
    _C.NOTIFY_AUTHORIZATION_RESULT: "Notify:AuthorizationResult",
    _C.NOTIFY_TIMELAPSE_STATUS_UPDATE: "Notify:TimelapseStatusUpdate",
    _C.NOTIFY_SYNC_CAPTURE_MODE_UPDATE: "Notify:SyncCaptureModeUpdate",
    _C.NOTIFY_SYNC_CAPTURE_BUTTON_TRIGGER: "Notify:SyncCaptureButtonTrigger",
    _C.NOTIFY_BT_REMOTE_VER_UPDATED: "Notify:BTRemoteVerUpdated",
    _C.NOTIFY_CAM_TEMPERATURE_VALUE: "Notify:CamTemperatureValue",
    _C.NOTIFY_CAM_WIFI_START: "Notify:CamWifiStart",
    _C.NOTIFY_CAM_BT_MSG_ANALYZE_FAILED: "Notify:CamBTMsgAnalyzeFailed",
    _C.NOTIFY_CHARGE_BOX_BATTERY_UPDATE: "Notify:ChargeBoxBatteryUpdate",
    _C.NOTIFY_LIVEVIEW_BEGIN_ROTATE: "Notify:LiveviewBeginRotate",
    _C.NOTIFY_EXPOSURE_UPDATE: "Notify:ExposureUpdate",
    _C.NOTIFY_CHARGE_BOX_CONNECT_STATUS: "Notify:ChargeBoxConnectStatus",
    _C.NOTIFY_WIFI_STATUS: "Notify:WifiStatus",
    _C.NOTIFY_UPDATE_LIVE_STREAM_PARAMS: "Notify:UpdateLiveStreamParams",
    _C.NOTIFY_FIRMWARE_UPGRADE_STATUS_TO_APP: "Notify:FirmwareUpgradeStatusToApp",
    _C.NOTIFY_USB_CARD_STATUS: "Notify:USBCardStatus",
    _C.NOTIFY_CAMERA_LIVE_STATUS: "Notify:CameraLiveStatus",
    _C.NOTIFY_WIFI_MODE_CHANGE: "Notify:WifiModeChange",
    _C.NOTIFY_DATA_EXPORT_STATUS: "Notify:DataExportStatus",
    _C.NOTIFY_WIFI_SCAN_LIST_CHANGED: "Notify:WifiScanListChanged",
    _C.NOTIFY_DETECTED_FACE: "Notify:DetectedFace",
    _C.NOTIFY_DARK_EIS_STATUS: "Notify:DarkEISStatus",
    _C.NOTIFY_CLOUD_STORAGE_BIND_STATUS: "Notify:CloudStorageBindStatus",
    _C.NOTIFY_SUPPORT_TAKE_PHOTO_ON_REC_STATUS: "Notify:SupportTakePhotoOnRecStatus",
    _C.NOTIFY_NEED_DOWNLOAD_FILE: "Notify:NeedDownloadFile",
    _C.NOTIFY_INTERVAL_REC_INFO: "Notify:IntervalRecInfo",
    _C.NOTIFY_CAM_SUBMODE_CHANGE: "Notify:CamSubmodeChange",
    _C.NOTIFY_DELETE_FILE_RESULT: "Notify:DeleteFileResult",
    _C.NOTIFY_FAVORITE_CHANGE_STATUS: "Notify:FavoriteChangeStatus",
    _C.NOTIFY_USER_TAKEOVER: "Notify:UserTakeover",
    # Response status codes.
    _C.RESPONSE_OK: "OK(200)",
    _C.RESPONSE_BAD_REQUEST: "BadRequest(400)",
    _C.RESPONSE_ERROR: "Error(500)",
    _C.RESPONSE_NOT_IMPLEMENTED: "NotImplemented(501)",
}

del _C


def code_name(code: int) -> str:
    """Return the display name of a 16-bit message code.

    Codes without a known name are shown as ``Unknown(0xNNNN)``.
    Raises ValueError if the value does not fit in 16 bits.
    """
    value = int(code)
    if not 0 <= value <= _MAX_CODE:
        raise ValueError(f"message code out of range: {value}")
    name = _DISPLAY_NAMES.get(value)
    if name is None:
        return f"Unknown(0x{value:04X})"
    return name